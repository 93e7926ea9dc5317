"""Run the video-trim HTTP server."""

from __future__ import annotations

import argparse
import ipaddress
import socket
import sys

import uvicorn

from .config import Settings, load_config
from .main import create_app


def local_ip() -> str:
    """Return the first non-loopback IPv4 address, or ``127.0.0.1``."""
    try:
        infos = socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET)
    except OSError:
        infos = []
    for info in infos:
        address = info[4][0]
        if not ipaddress.ip_address(address).is_loopback:
            return address

    # no name resolution for the hostname; ask the routing table instead
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as probe:
            probe.connect(("192.0.2.1", 9))
            address = probe.getsockname()[0]
    except OSError:
        return "127.0.0.1"
    return address if not ipaddress.ip_address(address).is_loopback else "127.0.0.1"


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Trim seconds from uploaded videos.")
    parser.add_argument("--host", help="Interface to bind (overrides VIDEOTRIM_HOST).")
    parser.add_argument("--port", type=int, help="Port to listen on (overrides VIDEOTRIM_PORT).")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)
    overrides = {key: value for key, value in (("host", args.host), ("port", args.port)) if value}
    config = load_config(Settings(**overrides))
    app = create_app(config)

    print(f"\nOpen in browser: http://{local_ip()}:{config.server.port}\n")
    print("Ensure your browser and server are on the same LAN!")

    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        timeout_keep_alive=config.server.idle_timeout_seconds,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
