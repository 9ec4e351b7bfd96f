# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Data files bundled with the analyzer and read through importlib.resources."""
