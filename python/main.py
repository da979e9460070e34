#!/usr/bin/env python3
"""S3 Deployer - エントリーポイント"""
import sys

from s3_deployer.cli import main


if __name__ == "__main__":
    sys.exit(main())
