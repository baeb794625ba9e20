from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from chatclient.config import load_config
from chatclient.core import ChatSession, Transport
from chatclient.ui import ConsoleActor
from chatcommon.protocol.errors import ChatError
from chatcommon.protocol.messages import Endpoint

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="chatclient", description="Chat with one peer over TCP until someone types \\quit.")
    p.add_argument("host", help="peer host name or address")
    p.add_argument("port", help="peer port, 0-65535")
    return p


def run_client(host: str, port: str, actor: Optional[ConsoleActor] = None, env_path: str = ".env") -> int:
    actor = actor or ConsoleActor()
    try:
        config = load_config(env_path)
        logging.basicConfig(level=config["log_level"])
        endpoint = Endpoint.parse(host, port)
    except ChatError as exc:
        print(f"ERROR, {exc.message}", file=sys.stderr)
        return 1
    if endpoint.below_recommended(config["recommended_min_port"]):
        actor.show(f"WARNING, recommended to use port number above {config['recommended_min_port']}")

    actor.show("Welcome to chatclient, your friendly chatting client!")
    try:
        username = actor.prompt_username(config["max_username_len"])
        session = ChatSession(Transport(config), actor, username)
        session.run(endpoint.host, endpoint.service)
    except ChatError as exc:
        logger.debug("Fatal chat error: %s", exc.to_payload())
        print(f"ERROR, {exc.message}", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        print("\nchatclient interrupted", file=sys.stderr)
        return 1

    actor.show("chatclient is exiting... Goodbye!")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    return run_client(args.host, args.port)


if __name__ == "__main__":
    raise SystemExit(main())
