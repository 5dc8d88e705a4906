"""
Handles the parallel processing of a batch of files.
This class contains the ProcessPoolExecutor and is used by the CLI.
"""
import logging
import time
import os
import concurrent.futures
from pathlib import Path
from typing import Callable

from .pipeline import ConversionPipeline
from ..utils.config import BatchConfig
from ..utils.logger import LOGGER_NAME, setup_worker_logger

# The main logger is configured by the entry point (CLI)
# We just get it here to write high-level status updates from the main process
log = logging.getLogger(LOGGER_NAME)

OUTPUT_SUFFIX = ".scss"


def resolve_output_path(source: Path, output: Path | None, single_input: bool) -> Path:
    """
    Decides where the SCSS for `source` goes.
    No output: next to the source. A single input may name an output file;
    otherwise the output is treated as a folder.
    """
    if output is None:
        return source.with_suffix(OUTPUT_SUFFIX)
    if single_input and output.suffix and not output.is_dir():
        return output
    return output / source.with_suffix(OUTPUT_SUFFIX).name


def _convert_single_file(path: Path, output_path: Path,
                         config: BatchConfig) -> tuple[Path, Path | None, str, Exception | None]:
    """
    A standalone function to be the target for the executor.
    It runs the conversion pipeline on a single file and
    captures all its log output.

    Returns:
        tuple[Path, Path | None, str, Exception | None]:
            - The path of the processed file.
            - The written output path, None if nothing was written.
            - The captured log output as a string.
            - An exception object if one occurred, else None.
    """
    # Set up in-memory logging for this worker process
    log_stream, log_handler = setup_worker_logger()
    worker_log = logging.getLogger(LOGGER_NAME)

    try:
        worker_log.info(f"Converting: {path.name}")

        pipeline = ConversionPipeline(config.conversion)
        written = pipeline.convert_file(path, output_path)

        worker_log.info(f"Finished conversion for: {path.name}")
        return path, written, log_stream.getvalue(), None

    except Exception as e:
        # 1. Log the full traceback locally to the worker's buffer.
        # This ensures the details are saved to the log file later.
        worker_log.error(f"Failed conversion for: {path.name}", exc_info=True)

        # 2. Sanitize the exception so the main process can unpickle it.
        safe_exc = RuntimeError(f"{type(e).__name__}: {str(e)}")
        return path, None, log_stream.getvalue(), safe_exc

    finally:
        log_handler.close()
        log_stream.close()


class BatchProcessor:
    """Orchestrates the conversion of multiple files in parallel."""

    def __init__(self, config: BatchConfig):
        self.config = config


    def run(self, files: list[Path], progress_callback: Callable | None = None) -> list[Path | None]:
        """
        Processes a list of files in parallel using ProcessPoolExecutor.

        Args:
            files: A list of Path objects to convert.
            progress_callback: A function to be called as each file completes.
                               It receives the (path, result, exception).

        Returns:
            The written output paths in input order (None where nothing was written).
        """
        th = self.config.num_threads
        max_workers = th if th > 0 else (os.cpu_count() or 1)
        log.info(f"Starting batch processing with up to {max_workers} workers.")

        single_input = len(files) == 1
        # Each item will be: (path, written_path, log_string, exception)
        ordered_results: list[tuple[Path, Path | None, str, Exception | None] | None] = [None] * len(files)

        with concurrent.futures.ProcessPoolExecutor(max_workers) as executor:
            # Keyed by input position, the same path may be listed twice
            future_to_index = {
                executor.submit(
                    _convert_single_file,
                    path,
                    resolve_output_path(path, self.config.output_path, single_input),
                    self.config,
                ): i
                for i, path in enumerate(files)
            }

            # Process results as they are completed
            for future in concurrent.futures.as_completed(future_to_index):
                idx = future_to_index[future]
                path = files[idx]

                try:
                    p, written, log_string, exc = future.result()
                    ordered_results[idx] = (p, written, log_string, exc)

                    if progress_callback:
                        progress_callback(path, written, exc)

                except Exception as e:
                    # A failure of the worker itself (e.g. the process died)
                    log.error(f"Critical worker failure for {path.name}: {e}", exc_info=True)
                    ordered_results[idx] = (path, None, f"CRITICAL FAILURE: {e}\n", e)
                    if progress_callback:
                        progress_callback(path, None, e)

            # Short delay for process shutdown
            time.sleep(0.05)

        log.info("Batch processing complete. Writing ordered logs...")
        self._write_worker_logs(ordered_results)

        return [result[1] if result else None for result in ordered_results]


    def _write_worker_logs(self, ordered_results):
        """Copies the buffered worker logs into the main log file, in input order."""
        file_handler = next(
            (h for h in log.handlers if isinstance(h, logging.FileHandler)), None
        )
        if file_handler is None:
            return

        for result in ordered_results:
            if result is None:
                log.error("Missing result in ordered list.")
                continue

            path, _, log_string, _ = result
            if not log_string:
                continue
            try:
                file_handler.stream.write(f"\n--- Log for {path.name} ---\n")
                file_handler.stream.write(log_string)
                file_handler.stream.write(f"--- End log for {path.name} ---\n")
            except OSError as e:
                log.error(f"Failed to write buffered log for {path.name}: {e}")
