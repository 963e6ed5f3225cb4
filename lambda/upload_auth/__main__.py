"""Invoke the upload handler locally with an API Gateway proxy event.

    python -m upload_auth event.json
    echo '{"body": "{...}"}' | python -m upload_auth
"""
import argparse
import json
import logging
import os
import sys

from .presign_url import main as handler

logger = logging.getLogger("upload_auth")


def run(argv=None):
    parser = argparse.ArgumentParser(prog="upload_auth", description=__doc__.splitlines()[0])
    parser.add_argument("event", nargs="?", type=argparse.FileType("r"), default=sys.stdin,
                        help="JSON proxy event (default: stdin)")
    args = parser.parse_args(argv)

    if os.environ.get("PLATFORM") == "lambda":
        args.event.close()
        logger.error("PLATFORM=lambda: the Lambda runtime invokes upload_auth.presign_url.main")
        return 2

    with args.event:
        event = json.load(args.event)
    response = handler(event, None)
    print(json.dumps(response, indent=2))
    return 0 if response["statusCode"] == 200 else 1


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    sys.exit(run())
