#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Lay out text on a page grid and write PDF slides.
"""

import grid_slide_generator.cli


if __name__ == "__main__":
	grid_slide_generator.cli.main()
