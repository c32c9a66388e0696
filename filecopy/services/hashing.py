"""
Hashing service for file integrity verification.

Digests are opaque fixed-width hex tokens. The default algorithm,
XXH128, yields 32 hex characters.
"""

from __future__ import annotations

import hashlib
import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional

import xxhash

from filecopy.core import inspector
from filecopy.core.models import CopyProgress, OperationResult, ProgressCallback


class HashAlgorithm(Enum):
    """Supported digest algorithms."""
    XXH128 = auto()  # Fast non-cryptographic hash, 128-bit
    MD5 = auto()
    SHA256 = auto()

    @property
    def label(self) -> str:
        return self._name_.lower()

    @property
    def hex_length(self) -> int:
        return 64 if self is HashAlgorithm.SHA256 else 32

    @classmethod
    def from_string(cls, value: str) -> 'HashAlgorithm':
        """Look up an algorithm by name, case-insensitively."""
        try:
            return cls[value.strip().upper()]
        except (KeyError, AttributeError):
            raise ValueError(f"Unknown hash algorithm: {value!r}") from None


@dataclass
class DigestResult:
    """Result of a digest operation."""
    result: OperationResult
    algorithm: HashAlgorithm
    hash_hex: Optional[str] = None
    file_size: int = 0

    @property
    def ok(self) -> bool:
        return self.result.ok


class HashingService:
    """Service for computing and verifying file digests."""

    def __init__(
        self,
        algorithm: HashAlgorithm = HashAlgorithm.XXH128,
        chunk_size: int = 65536
    ):
        self.algorithm = algorithm
        self.chunk_size = chunk_size

    def digest(
        self,
        path: Path | str,
        progress_callback: Optional[ProgressCallback] = None
    ) -> DigestResult:
        """
        Compute the digest of a file's entire content.

        Args:
            path: Path to the file
            progress_callback: Called after every chunk

        Returns:
            DigestResult carrying the hex digest, or the failure kind
        """
        path = Path(path)
        total_size = inspector.size_of(path)
        hasher = self._create_hasher()
        bytes_processed = 0

        try:
            f = open(path, 'rb')
        except OSError as e:
            logging.debug(f"HashingService - Cannot open {path}: {e}")
            return DigestResult(OperationResult.SOURCE_OPEN_FAILED, self.algorithm)

        with f:
            while True:
                try:
                    chunk = f.read(self.chunk_size)
                except OSError as e:
                    logging.debug(f"HashingService - Read error in {path}: {e}")
                    return DigestResult(OperationResult.READ_FAILED, self.algorithm)

                if not chunk:
                    break

                hasher.update(chunk)
                bytes_processed += len(chunk)

                if progress_callback:
                    progress_callback(CopyProgress(
                        copied_bytes=bytes_processed,
                        total_bytes=total_size,
                        name=str(path),
                    ))

        return DigestResult(
            result=OperationResult.SUCCESS,
            algorithm=self.algorithm,
            hash_hex=hasher.hexdigest(),
            file_size=bytes_processed,
        )

    def verify(self, path: Path | str, expected_digest: str) -> OperationResult:
        """Verify a file's digest against an expected value."""
        result = self.digest(path)
        if not result.ok:
            return result.result

        if result.hash_hex != expected_digest.strip().lower():
            return OperationResult.FILES_DIFFER

        return OperationResult.SUCCESS

    def _create_hasher(self):
        """Create a hasher for the configured algorithm."""
        if self.algorithm == HashAlgorithm.XXH128:
            return xxhash.xxh3_128()
        elif self.algorithm == HashAlgorithm.MD5:
            return hashlib.md5()
        elif self.algorithm == HashAlgorithm.SHA256:
            return hashlib.sha256()
        else:
            raise ValueError(f"Unknown algorithm: {self.algorithm}")
