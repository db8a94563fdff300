"""
Sample Python client for the YUVI Paste API.

Pushes a file (or stdin) as a paste from a script or CI job, then
prints the share link and raw content.

Requirements:
    pip install httpx python-dotenv

Usage:
    YUVI_API_KEY=YUVI_... python examples/sample_client.py build.log --type text
"""

import argparse
import asyncio
import os
import sys
from typing import Any, Dict, Optional

import httpx
from dotenv import load_dotenv


class PasteClient:
    """Async client for paste ingestion and public paste reads."""

    def __init__(self, api_key: str, base_url: str = "http://localhost:8000") -> None:
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=30.0,
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def __aenter__(self) -> "PasteClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def create_paste(
        self,
        content: str,
        paste_type: str = "text",
        title: Optional[str] = None,
        max_retries: int = 3,
    ) -> Dict[str, Any]:
        """
        Create a paste, retrying on 429 and 5xx responses.

        Returns:
            The created paste

        Raises:
            httpx.HTTPStatusError: On 4xx, or when retries run out
        """
        body: Dict[str, Any] = {"content": content, "type": paste_type}
        if title:
            body["title"] = title

        for attempt in range(max_retries):
            response = await self.client.post("/api/paste", json=body)
            if response.status_code == 429 and attempt < max_retries - 1:
                retry_after = int(response.headers.get("Retry-After", "60"))
                print(f"Rate limited. Waiting {retry_after}s...", file=sys.stderr)
                await asyncio.sleep(retry_after)
                continue
            if response.status_code >= 500 and attempt < max_retries - 1:
                await asyncio.sleep(2**attempt)
                continue
            response.raise_for_status()
            return response.json()

        raise RuntimeError("unreachable")

    async def get_paste(self, paste_id: str) -> Dict[str, Any]:
        """Fetch a paste by id (404 raises httpx.HTTPStatusError)."""
        response = await self.client.get(f"/paste/{paste_id}")
        response.raise_for_status()
        return response.json()

    async def get_raw(self, paste_id: str) -> Optional[str]:
        """Fetch only the content; None when the paste does not exist."""
        response = await self.client.get(f"/raw/{paste_id}")
        if response.status_code == 404:
            return None
        response.raise_for_status()
        return response.text


async def main() -> None:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Upload a paste to YUVI Paste")
    parser.add_argument("path", nargs="?", help="File to upload (default: stdin)")
    parser.add_argument("--type", default="text", choices=["json", "text", "code", "markdown"])
    parser.add_argument("--title")
    parser.add_argument("--base-url", default=os.getenv("YUVI_BASE_URL", "http://localhost:8000"))
    args = parser.parse_args()

    api_key = os.getenv("YUVI_API_KEY")
    if not api_key:
        print("Error: YUVI_API_KEY not set in environment", file=sys.stderr)
        sys.exit(1)

    if args.path:
        with open(args.path, encoding="utf-8") as f:
            content = f.read()
    else:
        content = sys.stdin.read()

    async with PasteClient(api_key=api_key, base_url=args.base_url) as client:
        try:
            paste = await client.create_paste(
                content, paste_type=args.type, title=args.title or args.path
            )
        except httpx.HTTPStatusError as e:
            print(f"Upload failed: {e.response.status_code} {e.response.text}", file=sys.stderr)
            sys.exit(1)

        print(f"Created paste {paste['id']} ({paste['size']} bytes)")
        print(f"  View: {client.base_url}/paste/{paste['id']}")
        print(f"  Raw:  {client.base_url}/raw/{paste['id']}")


if __name__ == "__main__":
    asyncio.run(main())
