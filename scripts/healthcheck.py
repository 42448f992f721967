#!/usr/bin/env python
"""Simple container healthcheck probing the Flask /healthz endpoint."""

import os
import sys
from urllib import request, error


def main() -> int:
    host = os.getenv("HEALTHCHECK_HOST", "127.0.0.1")
    port = os.getenv("PORT", "3001")
    target = f"http://{host}:{port}/healthz"
    try:
        with request.urlopen(target, timeout=5) as resp:
            if resp.status != 200:
                return 1
            return 0
    except error.URLError:
        return 1


if __name__ == "__main__":
    sys.exit(main())
