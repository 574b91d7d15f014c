"""Download the gnomAD constraint metrics table."""

import gzip
import shutil
from pathlib import Path

import httpx
import structlog
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from gnomad_pli.config.schema import GNOMAD_CONSTRAINT_URL

logger = structlog.get_logger()

CHUNK_SIZE = 8192


@retry(
    stop=stop_after_attempt(5),
    wait=wait_exponential(multiplier=1, min=4, max=60),
    retry=retry_if_exception_type(
        (httpx.HTTPStatusError, httpx.ConnectError, httpx.TimeoutException)
    ),
    reraise=True,
)
def download_constraint_table(
    output_path: Path,
    url: str = GNOMAD_CONSTRAINT_URL,
    force: bool = False,
    timeout: float = 120.0,
) -> Path:
    """Download the gnomAD constraint table, decompressing .gz/.bgz files.

    Args:
        output_path: Where to save the uncompressed table
        url: gnomAD constraint file URL (default: v2.1.1 per-gene metrics)
        force: Re-download even if output_path exists
        timeout: Request timeout in seconds

    Returns:
        Path to the downloaded table

    Raises:
        httpx.HTTPStatusError: On HTTP errors (after retries)
        httpx.ConnectError: On connection errors (after retries)
        httpx.TimeoutException: On timeout (after retries)
    """
    output_path = Path(output_path)

    if output_path.exists() and not force:
        logger.info("constraint_download_skipped", path=str(output_path))
        return output_path

    output_path.parent.mkdir(parents=True, exist_ok=True)

    is_compressed = url.endswith((".bgz", ".gz"))
    temp_path = output_path.with_suffix(output_path.suffix + ".tmp")

    logger.info("constraint_download_start", url=url, compressed=is_compressed)

    downloaded = 0
    with httpx.stream("GET", url, timeout=timeout, follow_redirects=True) as response:
        response.raise_for_status()
        with open(temp_path, "wb") as f:
            for chunk in response.iter_bytes(chunk_size=CHUNK_SIZE):
                f.write(chunk)
                downloaded += len(chunk)

    # bgzip output is gzip-compatible
    if is_compressed:
        with gzip.open(temp_path, "rb") as f_in, open(output_path, "wb") as f_out:
            shutil.copyfileobj(f_in, f_out)
        temp_path.unlink()
    else:
        temp_path.replace(output_path)

    logger.info(
        "constraint_download_complete",
        path=str(output_path),
        downloaded_bytes=downloaded,
    )

    return output_path
