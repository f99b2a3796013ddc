"""Command line entry point.

Usage:
    # One GET, print the body
    laakhay-paging get https://api.example.com/orgs/acme

    # Every page of a page-number resource, one JSON line per page
    laakhay-paging page https://api.example.com/orgs/acme/repos --page-size 100

    # Elements of an index/size resource that reports its total
    laakhay-paging index-page http://host/YamahaExtendedControl/v1/netusb/getListInfo \
        --array-name list_info --elements list_id=main input=net_radio

    # Arbitrary method; the process exits with the mapped status
    laakhay-paging call POST https://api.example.com/things --json '{"a": 1}'

Transport settings come from LAAKHAY_PAGING_* environment variables
(BASE_URL, TIMEOUT, MAX_CONNECTIONS, VERIFY_SSL, TOKEN) and can be
overridden with flags.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from collections.abc import AsyncIterator, Sequence
from dataclasses import replace
from typing import Any, TextIO

from .config import TransportConfig
from .core.exceptions import PagingError, TransportError
from .models.records import FetchResult
from .models.request import RequestDescriptor
from .runtime.pagination import (
    BoundedRangePaginator,
    HeuristicPaginator,
    IndexPolicy,
    PagePolicy,
    page_elements,
)
from .runtime.rest import BatchExecutor, HTTPClient, MethodInvoker, RequestFacade

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="laakhay-paging", description="Batched retrieval of paginated REST resources"
    )
    parser.add_argument("--base-url", type=str, help="Prefix for relative URLs")
    parser.add_argument("--timeout", type=float, help="Per-request timeout in seconds")
    parser.add_argument("--insecure", action="store_true", help="Skip TLS verification")
    parser.add_argument("--verbose", "-v", action="count", default=0, help="Log progress to stderr")
    sub = parser.add_subparsers(dest="command", required=True)

    get = sub.add_parser("get", help="GET one resource and print its body")
    get.add_argument("url")
    get.add_argument("params", nargs="*", help="key=value query parameters")

    page = sub.add_parser("page", help="Page-number pagination until a short page")
    _add_common_paging(page)
    page.add_argument("--page-size", type=int, default=PagePolicy.page_size)
    page.add_argument("--batch-size", type=int, default=PagePolicy.batch_size)
    page.add_argument("--lookahead", type=int, default=PagePolicy.lookahead_size)

    index = sub.add_parser("index-page", help="Index/size pagination using the reported total")
    _add_common_paging(index)
    index.add_argument("--page-size", type=int, default=IndexPolicy.page_size)
    index.add_argument("--total-field", type=str, default=IndexPolicy.total_field)

    call = sub.add_parser("call", help="Single request; exit status reflects the outcome")
    call.add_argument("method")
    call.add_argument("url")
    call.add_argument("params", nargs="*", help="key=value query parameters")
    call.add_argument("--json", dest="json_body", type=str, help="JSON request body")
    call.add_argument(
        "--header", "-H", action="append", default=[], help="'Name: value' header (not logged)"
    )
    return parser


def _add_common_paging(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("url", nargs="?", help="Resource URL (omit with --stdin)")
    parser.add_argument("params", nargs="*", help="key=value query parameters")
    parser.add_argument("--array-name", type=str, help="Body field holding the page elements")
    parser.add_argument(
        "--stdin", action="store_true", help="Read descriptor JSON objects, one per line"
    )
    parser.add_argument("--elements", action="store_true", help="Print elements, not pages")


def read_descriptors(stream: TextIO) -> list[RequestDescriptor]:
    return [RequestDescriptor.from_json(line) for line in stream if line.strip()]


def _descriptors(args: argparse.Namespace) -> list[RequestDescriptor]:
    if args.stdin:
        return read_descriptors(sys.stdin)
    if not args.url:
        raise SystemExit("a URL is required unless --stdin is given")
    if args.command == "index-page" and not args.array_name:
        raise SystemExit("index-page requires --array-name")
    return [RequestDescriptor(url=args.url, params=tuple(args.params), arrayName=args.array_name)]


def _write(value: Any, out: TextIO) -> None:
    out.write(json.dumps(value) + "\n")


async def _print_results(results: AsyncIterator[FetchResult], elements: bool, out: TextIO) -> None:
    async for result in results:
        if not elements:
            _write(result.to_dict(), out)
            continue
        items = page_elements(result.output, result.request.array_name)
        for item in items if isinstance(items, list) else []:
            _write(item, out)


def _config(args: argparse.Namespace) -> TransportConfig:
    config = TransportConfig.from_env()
    if args.base_url:
        config = replace(config, base_url=args.base_url)
    if args.timeout:
        config = replace(config, timeout=args.timeout)
    if args.insecure:
        config = replace(config, verify_ssl=False)
    return config


def _parse_json_body(value: str | None) -> Any:
    if not value:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as e:
        raise SystemExit(f"invalid --json body: {e}") from e


def _parse_headers(values: Sequence[str]) -> dict[str, str]:
    headers = {}
    for value in values:
        name, sep, content = value.partition(":")
        if not sep:
            raise SystemExit(f"invalid header {value!r}, expected 'Name: value'")
        headers[name.strip()] = content.strip()
    return headers


async def run(args: argparse.Namespace, out: TextIO = sys.stdout) -> int:
    """Execute a parsed command and return the process exit status."""
    async with HTTPClient(_config(args)) as client:
        if args.command == "call":
            invoker = MethodInvoker(client)
            json_body = _parse_json_body(args.json_body)
            invocation = await invoker.invoke(
                args.method,
                args.url,
                params=args.params,
                json_body=json_body,
                headers=_parse_headers(args.header),
            )
            if invocation.ok and invocation.body is not None:
                _write(invocation.body, out)
            return invocation.exit_status

        facade = RequestFacade(BatchExecutor(client))
        try:
            if args.command == "get":
                result = await facade.fetch(RequestDescriptor(url=args.url, params=tuple(args.params)))
                _write(result.output, out)
                return 0
            if args.command == "page":
                paginator: HeuristicPaginator | BoundedRangePaginator = HeuristicPaginator(
                    facade,
                    PagePolicy(
                        page_size=args.page_size,
                        batch_size=args.batch_size,
                        lookahead_size=args.lookahead,
                    ),
                )
            else:
                paginator = BoundedRangePaginator(
                    facade, IndexPolicy(page_size=args.page_size, total_field=args.total_field)
                )
            await _print_results(paginator.paginate(_descriptors(args)), args.elements, out)
            return 0
        except TransportError as e:
            logger.error("transport_failed", extra={"url": e.url, "exit_code": e.exit_code})
            return e.exit_code
        except PagingError as e:
            logger.error("request_failed", extra={"error_message": str(e)})
            return 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
