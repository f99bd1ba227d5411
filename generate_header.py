#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Render version and validity text onto a header template PNG.
"""

import cenik_header_generator.cli


if __name__ == "__main__":
	raise SystemExit(cenik_header_generator.cli.main())
