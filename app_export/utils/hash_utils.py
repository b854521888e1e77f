"""Hash calculation utilities"""

import hashlib
from pathlib import Path

import aiofiles


def calculate_sha1(file_path: Path, chunk_size: int = 8192) -> str:
    """
    Calculate SHA1 hash of file

    Args:
        file_path: Path to file
        chunk_size: Read chunk size

    Returns:
        Lowercase hex digest string
    """
    sha1_hash = hashlib.sha1()

    with open(file_path, 'rb') as f:
        while chunk := f.read(chunk_size):
            sha1_hash.update(chunk)

    return sha1_hash.hexdigest()


async def calculate_file_hash_async(file_path: Path,
                                    algorithm: str = "sha1",
                                    chunk_size: int = 8192) -> str:
    """
    Calculate file hash asynchronously

    Args:
        file_path: Path to file
        algorithm: Hash algorithm
        chunk_size: Read chunk size

    Returns:
        Hex digest string
    """
    hash_func = hashlib.new(algorithm)

    async with aiofiles.open(file_path, 'rb') as f:
        while True:
            chunk = await f.read(chunk_size)
            if not chunk:
                break
            hash_func.update(chunk)

    return hash_func.hexdigest()
