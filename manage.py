#!/usr/bin/env python3
"""
buildconf management utility.
Commands: show, render, check, flags

Examples:
  python3 manage.py show --production --extract-css
  python3 manage.py render --format js -o webpack.config.js
  python3 manage.py check --all

Environment:
  BUILDCONF_SETTINGS=development|production|testing
  BUILDCONF_ROOT=/path/to/project
  BUILDCONF_FORMAT=json|js
  BUILDCONF_LOG_FILE=logs/buildconf.log
  LOG_LEVEL=INFO
"""

from buildconf.core.cli import main


if __name__ == "__main__":
    main()
