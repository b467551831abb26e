#!/usr/bin/env python3
"""Smoke test a running diffview API server."""

import argparse
import sys

import requests

SAMPLE_DIFF = """diff --git a/hello.py b/hello.py
index 1111111..2222222 100644
--- a/hello.py
+++ b/hello.py
@@ -1,2 +1,2 @@
 def hello():
-    print('Hello')
+    print('Hello, World!')
"""


def main() -> int:
    parser = argparse.ArgumentParser(description="Smoke test the diffview API")
    parser.add_argument("--url", default="http://127.0.0.1:8000", help="API base URL")
    args = parser.parse_args()

    for fmt in ("json", "html"):
        response = requests.post(
            f"{args.url}/render",
            json={"diff": SAMPLE_DIFF, "format": fmt, "style": "side"},
            timeout=30,
        )
        print(f"[{fmt}] status code: {response.status_code}")
        if response.status_code != 200:
            print(response.text)
            return 1
        result = response.json()
        print(f"[{fmt}] content length: {len(result['data']['content'])} characters")

    return 0


if __name__ == "__main__":
    sys.exit(main())
