# company_api/sanitize.py
import html

import nh3


def sanitize(value: str) -> str:
    """Strip all HTML from a user-supplied string and trim it.

    Tags are dropped, script/style bodies are dropped with them, and the
    result is plain text (``"Smith & Co"`` stays ``"Smith & Co"``).

    Entity-encoded markup ("&lt;b&gt;") becomes real markup after unescaping,
    so cleaning repeats until the text stops changing. Every pass that changes
    the text shortens it, so the loop ends.
    """
    cleaned = value
    while True:
        stripped = html.unescape(nh3.clean(cleaned, tags=set()))
        if stripped == cleaned:
            return cleaned.strip()
        cleaned = stripped
