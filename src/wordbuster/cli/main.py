# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

"""wordbuster CLI."""

from __future__ import annotations

import argparse
import logging
import signal
import sys
import threading
from collections.abc import Callable
from contextlib import ExitStack
from typing import IO

from ..config import Options, load_options
from ..errors import ConfigurationError, SetupError, error_category_to_reason
from ..http import create_default_probe_client
from ..log import setup_logging
from ..scan import Engine
from ..strategies import DirOptions, DirStrategy, DnsOptions, DnsStrategy, Strategy, parse_status_codes
from ..version import __version__
from ..wordlist import Wordlist, normalize_extensions

logger = logging.getLogger(__name__)

RULER = "=" * 53
PROGRESS_INTERVAL = 1.0


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("-w", "--wordlist", required=True, help="Path to the wordlist")
    common.add_argument("-t", "--threads", type=int, default=None, help="Number of concurrent workers (default 10)")
    common.add_argument("-o", "--output", help="Write found entries to this file")
    common.add_argument("-q", "--quiet", action="store_true", help="Only print results; no banner, progress or errors")
    common.add_argument("-z", "--no-progress", action="store_true", help="Don't display progress")
    common.add_argument("-v", "--verbose", action="store_true", help="Verbose (debug) logging")
    common.add_argument("--timeout", type=float, default=None, help="Per-probe timeout in seconds (default 10)")
    common.add_argument("--wildcard", action="store_true", help="Force continued operation when wildcard responses are found")

    parser = argparse.ArgumentParser(prog="wordbuster", description="Concurrent content discovery for URIs and DNS subdomains")
    subparsers = parser.add_subparsers(dest="mode", required=True)

    dir_parser = subparsers.add_parser("dir", parents=[common], help="Directory/file enumeration")
    dir_parser.add_argument("-u", "--url", required=True, help="Target URL")
    dir_parser.add_argument("-c", "--cookies", help="Cookies to use for the requests")
    dir_parser.add_argument("-x", "--extensions", help="File extension(s) to search for, e.g. php,txt")
    dir_parser.add_argument("-s", "--status-codes", help="Positive status codes (default 200,204,301,302,307,401,403)")
    dir_parser.add_argument("-U", "--username", help="Username for Basic Auth")
    dir_parser.add_argument("-P", "--password", help="Password for Basic Auth")
    dir_parser.add_argument("-a", "--useragent", help="Set the User-Agent string")
    dir_parser.add_argument("-p", "--proxy", help="Proxy to use for requests [http(s)://host:port]")
    dir_parser.add_argument("-k", "--insecure", action="store_true", default=None, help="Skip TLS certificate verification")
    dir_parser.add_argument("-r", "--follow-redirect", action="store_true", default=None, help="Follow redirects")
    dir_parser.add_argument("-l", "--include-length", action="store_true", help="Include the length of the body in the output")
    dir_parser.add_argument("-e", "--expanded", action="store_true", help="Expanded mode, print full URLs")
    dir_parser.add_argument("-n", "--no-status", action="store_true", help="Don't print status codes")

    dns_parser = subparsers.add_parser("dns", parents=[common], help="DNS subdomain enumeration")
    dns_parser.add_argument("-d", "--domain", required=True, help="The target domain")
    dns_parser.add_argument("-i", "--show-ips", action="store_true", help="Show IP addresses")
    return parser


def _build_options(args: argparse.Namespace) -> Options:
    overrides = {
        "threads": args.threads,
        "timeout": args.timeout,
        "quiet": args.quiet,
        "no_progress": args.no_progress,
        "wordlist": args.wordlist,
        "output_filename": args.output,
    }
    if args.mode == "dir":
        overrides.update(
            proxy=args.proxy,
            insecure_ssl=args.insecure,
            follow_redirect=args.follow_redirect,
            username=args.username,
            password=args.password,
            cookies=args.cookies,
            user_agent=args.useragent,
            include_length=args.include_length,
        )
        return load_options(args.url, **overrides)
    return load_options(args.domain, **overrides)


def _build_dir(args: argparse.Namespace, options: Options, cancel_event: threading.Event, stack: ExitStack) -> Strategy:
    dir_options = DirOptions(
        status_codes=parse_status_codes(args.status_codes),
        expanded=args.expanded,
        no_status=args.no_status,
        wildcard_forced=args.wildcard,
        extensions=normalize_extensions(args.extensions),
    )
    client = create_default_probe_client(options, cancel_event)
    stack.callback(client.close)
    return DirStrategy(options, client, dir_options)


def _build_dns(args: argparse.Namespace, options: Options, cancel_event: threading.Event, stack: ExitStack) -> Strategy:  # noqa: ARG001
    return DnsStrategy(options, DnsOptions(show_ips=args.show_ips, wildcard_forced=args.wildcard))


_BUILDERS: dict[str, Callable[[argparse.Namespace, Options, threading.Event, ExitStack], Strategy]] = {
    "dir": _build_dir,
    "dns": _build_dns,
}


# The result and error consumers must range over their channel until it is
# closed, whatever happens, so the engine always has a receiver.


def _result_worker(engine: Engine, stdout: IO[str], output: IO[str] | None) -> None:
    for result in engine.results():
        line = engine.strategy.result_to_string(result).strip()
        if not line:
            continue
        engine.clear_progress()
        print(line, file=stdout, flush=True)
        if output is None:
            continue
        try:
            output.write(f"{line}\n")
            output.flush()
        except OSError as exc:
            logger.error("Unable to write to output file: %s", exc)
            output = None


def _error_worker(engine: Engine) -> None:
    for error in engine.errors():
        if not engine.options.quiet:
            engine.clear_progress()
            reason = error_category_to_reason(error.category)
            if reason:
                logger.warning("[!] %s (%s)", error, reason)
            else:
                logger.warning("[!] %s", error)


def _progress_worker(engine: Engine, done: threading.Event) -> None:
    while not done.wait(PROGRESS_INTERVAL):
        engine.print_progress()


def _print_banner(engine: Engine, stdout: IO[str]) -> None:
    print("", file=stdout)
    print(RULER, file=stdout)
    print(f"wordbuster v{__version__}", file=stdout)
    print(RULER, file=stdout)
    print(engine.config_string(), file=stdout)
    print(RULER, file=stdout, flush=True)


def run(engine: Engine, stdout: IO[str] | None = None) -> int:
    """Drive one engine run with its consumers; returns a process exit status."""
    stdout = stdout or sys.stdout
    options = engine.options

    with ExitStack() as stack:
        output = None
        if options.output_filename:
            try:
                output = stack.enter_context(open(options.output_filename, "w", encoding="utf-8"))
            except OSError as exc:
                logger.error("error on creating output file: %s", exc)
                return 1

        if not options.quiet:
            _print_banner(engine, stdout)
            logger.info("Starting wordbuster in %s mode", engine.strategy.name)

        done = threading.Event()
        consumers = [
            threading.Thread(target=_error_worker, args=(engine,), name="wordbuster-errors"),
            threading.Thread(target=_result_worker, args=(engine, stdout, output), name="wordbuster-results"),
        ]
        if not options.quiet and not options.no_progress:
            consumers.append(threading.Thread(target=_progress_worker, args=(engine, done), name="wordbuster-progress", daemon=True))
        for consumer in consumers:
            consumer.start()

        status = 0
        try:
            engine.start()
        except SetupError as exc:
            logger.error("[!] %s", exc)
            status = 1
        finally:
            done.set()
            for consumer in consumers:
                consumer.join()

    if not options.quiet:
        engine.clear_progress()
        print(RULER, file=stdout)
        print("Finished" if status == 0 else "Aborted", file=stdout)
        print(RULER, file=stdout, flush=True)
    return status


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else None)

    cancel_event = threading.Event()
    with ExitStack() as stack:
        try:
            options = _build_options(args)
            extensions = normalize_extensions(args.extensions) if args.mode == "dir" else ()
            words = stack.enter_context(Wordlist(args.wordlist, extensions=extensions))
            strategy = _BUILDERS[args.mode](args, options, cancel_event, stack)
        except ConfigurationError as exc:
            logger.error("[!] %s", exc)
            return 1

        engine = Engine(options, strategy, words, cancel_event=cancel_event)
        previous_handler = signal.signal(signal.SIGINT, lambda _signum, _frame: cancel_event.set())
        try:
            return run(engine)
        finally:
            signal.signal(signal.SIGINT, previous_handler)


if __name__ == "__main__":
    raise SystemExit(main())
