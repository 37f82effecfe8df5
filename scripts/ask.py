from __future__ import annotations

import argparse
import asyncio
import mimetypes
from pathlib import Path
from typing import Optional

from nexus_mentor.observability import setup_logging
from nexus_mentor.router import MentorRouter
from nexus_mentor.schemas import Attachment
from nexus_mentor.settings import Settings


def load_attachment(path: Optional[str]) -> Optional[Attachment]:
    if not path:
        return None
    p = Path(path)
    if not p.exists():
        raise SystemExit(f"Image not found: {p.resolve()}")
    mime_type = mimetypes.guess_type(p.name)[0] or "image/png"
    return Attachment.from_bytes(p.read_bytes(), mime_type)


def main():
    parser = argparse.ArgumentParser(description="Ask the NEXUS mentor a question.")
    parser.add_argument("message")
    parser.add_argument("--image", help="architecture diagram to attach")
    parser.add_argument("--search", action="store_true", help="ground the answer with Google Search")
    parser.add_argument("--offline", action="store_true", help="ignore the configured key and simulate")
    args = parser.parse_args()

    s = Settings()
    setup_logging(s.log_level)
    router = MentorRouter(s)
    credential = None if args.offline else s.gemini_api_key

    resp = asyncio.run(
        router.generate_chat_response(
            args.message,
            credential,
            attachment=load_attachment(args.image),
            use_search=args.search,
        )
    )
    print(resp.text)
    if resp.grounding_chunks:
        print("\nSources:")
        for c in resp.grounding_chunks:
            if c.web:
                print(f"- {c.label()}: {c.web.uri}")


if __name__ == "__main__":
    main()
