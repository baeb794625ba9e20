from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional

from chatclient.ui import ConsoleActor
from chatcommon.protocol.errors import ChatError
from chatcommon.protocol.messages import Endpoint
from chatserve.config import load_server_config
from chatserve.core import ChatServer

logger = logging.getLogger(__name__)


def run_server(
    port: str,
    host: str | None = None,
    actor: Optional[ConsoleActor] = None,
    env_path: str = ".env",
) -> int:
    actor = actor or ConsoleActor()
    try:
        config = load_server_config(env_path)
        logging.basicConfig(level=config["log_level"])
        endpoint = Endpoint.parse(host or config["host"], port)
    except ChatError as exc:
        print(f"ERROR, {exc.message}", file=sys.stderr)
        return 1
    if endpoint.below_recommended(config["recommended_min_port"]):
        actor.show(f"WARNING, recommended to use port number above {config['recommended_min_port']}")

    server = None
    try:
        username = actor.prompt_username(config["max_username_len"])
        server = ChatServer(endpoint.host, endpoint.port, username, actor, config)
        try:
            server.start()
        except OSError as exc:
            print(f"ERROR, could not listen on port {endpoint.port}: {exc}", file=sys.stderr)
            return 1
        server.serve_forever()
    except OSError as exc:
        logger.debug("Server loop failed", exc_info=True)
        print(f"ERROR, chat server stopped: {exc}", file=sys.stderr)
        return 1
    except (EOFError, KeyboardInterrupt):
        actor.show("\nchatserve is shutting down... Goodbye!")
    finally:
        if server is not None:
            server.stop()
    return 0


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="chatserve", description="Host one chatclient conversation at a time.")
    p.add_argument("port", help="port to listen on, 0-65535")
    p.add_argument("--host", default=None, help="address to bind (default from CHATSERVE_HOST)")
    args = p.parse_args(argv)
    return run_server(args.port, args.host)


if __name__ == "__main__":
    raise SystemExit(main())
