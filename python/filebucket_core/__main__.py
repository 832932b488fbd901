#!/usr/bin/env python3
"""
Simple command-line tool for file bucket operations
"""
import os
import sys
import logging
import argparse

from . import settings
from .backends import DirectoryBackend
from .core.utils import format_size
from .digest import DigestAlgorithm
from .errors import ConfigurationError, FileBucketError, ValidationError
from .helpers import (
    batch_store_files,
    calculate_file_hash,
    retrieve_file_to_path,
    verify_file_integrity,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Content addressed file bucket")
    parser.add_argument("--bucket-dir", help="Bucket directory (default: $%s or %s)"
                        % (settings.BUCKET_DIR_ENV, settings.DEFAULT_BUCKET_DIR))
    parser.add_argument("--digest-algorithms",
                        help="Comma separated digest algorithms (default: $%s or '%s')"
                        % (settings.DIGEST_ALGORITHMS_ENV, settings.DEFAULT_DIGEST_ALGORITHMS))
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Hash command
    hash_parser = subparsers.add_parser("hash", help="Calculate checksum of a file")
    hash_parser.add_argument("file", help="Path to file")
    hash_parser.add_argument("--algorithm", "-a",
                             choices=[algorithm.value for algorithm in DigestAlgorithm],
                             help="Digest algorithm to use (default: first configured)")

    # Backup command
    backup_parser = subparsers.add_parser("backup", help="Store files in the bucket")
    backup_parser.add_argument("files", nargs="+", help="Paths to files")

    # Get command
    get_parser = subparsers.add_parser("get", help="Retrieve a file by name")
    get_parser.add_argument("name", help="Bucket file name, e.g. md5/<digest>")
    get_parser.add_argument("--output", "-o", help="Output file path (default: stdout)")

    # Verify command
    verify_parser = subparsers.add_parser("verify", help="Verify a stored file")
    verify_parser.add_argument("name", help="Bucket file name, e.g. md5/<digest>")

    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = settings.configure(args.digest_algorithms, args.bucket_dir)
    except ConfigurationError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1

    backend = DirectoryBackend(config.bucket_dir)

    # Process commands
    if args.command == "hash":
        try:
            print(calculate_file_hash(args.file, args.algorithm))
        except OSError as e:
            print(f"Failed to hash {args.file}: {e}", file=sys.stderr)
            return 1

    elif args.command == "backup":
        failed = False
        for file_path, result in batch_store_files(backend, args.files).items():
            if result.startswith("Error:"):
                print(f"Failed to store {file_path}: {result}", file=sys.stderr)
                failed = True
            else:
                print(f"{file_path}: {result}")
        return 1 if failed else 0

    elif args.command == "get":
        try:
            if args.output:
                retrieve_file_to_path(backend, args.name, args.output)
                print(f"Retrieved {format_size(os.path.getsize(args.output))} to: {args.output}")
            else:
                bucket_file = backend.find(args.name)
                if bucket_file is None:
                    raise FileNotFoundError(f"Bucket file {args.name} not found")
                sys.stdout.buffer.write(bucket_file.contents)
        except (OSError, FileBucketError) as e:
            print(str(e), file=sys.stderr)
            return 1

    elif args.command == "verify":
        try:
            intact = verify_file_integrity(backend, args.name)
        except ValidationError as e:
            print(str(e), file=sys.stderr)
            return 1
        if not intact:
            print(f"Bucket file verification failed: {args.name}", file=sys.stderr)
            return 1
        print(f"Bucket file verified: {args.name}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
