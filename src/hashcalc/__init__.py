"""
hashcalc - concurrent file hashing

Walks a directory tree, hashes every file whose name matches a glob
pattern with a pool of worker threads (MD5, SHA1, SHA256, XXHASH64 or
BLAKE3) and reports, renames or writes out the digests.
"""

from hashcalc.shared.constants import APPLICATION_VERSION

__version__ = APPLICATION_VERSION

__all__ = ["__version__"]
