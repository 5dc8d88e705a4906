"""
Entry point for running the converter from a source checkout.
"""

from twcss_to_sass.main import main

if __name__ == "__main__":
    main()
