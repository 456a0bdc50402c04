"""Test setup for mdoutline."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


@pytest.fixture
def sample_markdown() -> str:
    """A small book-summary style document with code, a table and links."""
    return """\
Notes on writing clean code.

# Clean Code

See [Functions](#functions) and [Naming](#meaningful-names).

## Meaningful Names

Use intention-revealing names.

```python
# not a heading
elapsed_days = 3
```

## Functions

| Rule | Why |
| --- | --- |
| Small | Easy to read |
| Do one thing | Focus |

### Arguments

Prefer fewer arguments. Back to [top](#clean-code).

# Summary

The end.
"""
