"""Prints log records received on a ZeroMQ PULL socket."""

from __future__ import annotations

import argparse
import signal
import sys
import threading
from typing import Optional, TextIO

import zmq

from chatcore.logging_manager import DEFAULT_ENDPOINT


def view_logs(
    endpoint: str = DEFAULT_ENDPOINT,
    out: Optional[TextIO] = None,
    stop_event: Optional[threading.Event] = None,
    poll_interval: float = 0.1,
) -> int:
    """Bind ``endpoint`` and print each message until ``stop_event`` is set.

    Returns the number of messages printed. A ZeroMQ error is reported on
    standard error and ends the viewer.
    """
    out = out if out is not None else sys.stdout
    stop_event = stop_event if stop_event is not None else threading.Event()
    timeout_ms = max(int(poll_interval * 1000), 0)
    received = 0

    context = zmq.Context()
    try:
        receiver = context.socket(zmq.PULL)
        receiver.setsockopt(zmq.LINGER, 0)
        try:
            receiver.bind(endpoint)
            print("Log viewer started. Waiting for messages...", file=out, flush=True)
            while not stop_event.is_set():
                if receiver.poll(timeout_ms, zmq.POLLIN):
                    message = receiver.recv(zmq.NOBLOCK)
                    print(message.decode("utf-8", errors="replace"), file=out, flush=True)
                    received += 1
        finally:
            receiver.close()
    except zmq.ZMQError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return received
    finally:
        context.term()

    print("\nEnd.", file=out, flush=True)
    return received


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="chatcore-log-viewer",
        description="Print log records pushed by the application.",
    )
    parser.add_argument("--endpoint", default=DEFAULT_ENDPOINT)
    args = parser.parse_args(argv)

    stop_event = threading.Event()

    def _stop(signum, frame):
        stop_event.set()

    previous = {
        signum: signal.signal(signum, _stop) for signum in (signal.SIGINT, signal.SIGTERM)
    }
    try:
        view_logs(args.endpoint, stop_event=stop_event)
    finally:
        for signum, handler in previous.items():
            signal.signal(signum, handler)
    return 0