# src/threadline/scripts/tokens.py
"""
Mint a development session token for a viewer.

In production the identity provider issues these; locally this script signs
one with SECRET_KEY so the API can be exercised with curl.

    python -m threadline.scripts.tokens user_123
"""

import argparse

from threadline.core.security import create_access_token


def main(argv: list[str] | None = None) -> str:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("viewer_id", help="External id of the viewer (token subject)")
    args = parser.parse_args(argv)

    token = create_access_token(args.viewer_id)
    print(token)
    return token


if __name__ == "__main__":
    main()
