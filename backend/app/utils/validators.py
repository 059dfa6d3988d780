"""
Validators
"""
from pathlib import PurePath
from typing import List


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot ("" when there is none)"""
    return PurePath(filename or "").suffix.lstrip(".").lower()


def validate_file_extension(filename: str, allowed_extensions: List[str]) -> bool:
    """Validate file extension"""
    return file_extension(filename) in allowed_extensions


def validate_file_size(file_size: int, max_size: int) -> bool:
    """Validate file size"""
    return 0 < file_size <= max_size
