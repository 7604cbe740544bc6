"""Pytest configuration and fixtures."""

import logging
import os
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

# Set test environment variables
os.environ.setdefault("LOG_LEVEL", "INFO")
os.environ.setdefault("SERVICE_ENVIRONMENT", "test")


@pytest.fixture(scope="session")
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def restore_root_logger():
    """Undo configure_logging() calls made by the code under test."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def sample_response() -> str:
    """A typical coder agent response with two files and closing remarks."""
    return """
I'll create a Fibonacci function for you:

```typescript fibonacci.ts
/** Calculates the nth Fibonacci number using recursion */
export function fibonacci(n: number): number {
  if (n <= 1) return n;
  return fibonacci(n - 1) + fibonacci(n - 2);
}
```

```typescript fibonacci.test.ts
import { fibonacci } from "./fibonacci";
console.log(fibonacci(10));
```

This implementation uses simple recursion. For better performance with large numbers, consider using memoization.
"""
