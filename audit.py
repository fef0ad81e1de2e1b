#!/usr/bin/env python3
"""
winposture - Windows security posture audit

Portable launcher: runs from a checkout without installation.

Usage:
    python audit.py audit
    python audit.py audit --check uac --check bitlocker --output report.json
    python audit.py audit --snapshot host-state.yaml --format csv -o report.csv
    python audit.py list-checks
"""

import sys
import os

# Ensure we can import the package from a checkout
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))


if __name__ == "__main__":
    from winposture.cli.app import main
    main()
