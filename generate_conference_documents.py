#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Generate conference placards and badges from a rows file.
"""

# local repo modules
import conference_documents.cli


if __name__ == "__main__":
	conference_documents.cli.main()
