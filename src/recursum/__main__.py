# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Allow ``python -m recursum`` to invoke the CLI."""

from __future__ import annotations

from .cli.app import main

if __name__ == "__main__":  # pragma: no cover - module execution hook
    main()
