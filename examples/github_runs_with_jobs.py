#!/usr/bin/env python3
"""Collect a repository's workflow runs together with their jobs.

Runs are paginated per repository; every run's jobs are then paginated in
one fan-out, each jobs request carrying its run as context so the pages can
be folded back onto it.

Usage:
    LAAKHAY_PAGING_TOKEN=ghp_... python examples/github_runs_with_jobs.py python/cpython ">2024-06-01"
"""

import asyncio
import json
import logging
import sys
from collections import defaultdict
from dataclasses import replace
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from laakhay.paging import (
    BatchExecutor,
    HeuristicPaginator,
    HTTPClient,
    PagePolicy,
    RequestDescriptor,
    RequestFacade,
    TransportConfig,
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")
logger = logging.getLogger(__name__)

API = "https://api.github.com"


async def main(repo: str, created: str) -> None:
    config = TransportConfig.from_env()
    config = replace(
        config,
        base_url=API,
        headers={**config.headers, "X-GitHub-Api-Version": "2022-11-28"},
    )
    async with HTTPClient(config) as client:
        paginator = HeuristicPaginator(RequestFacade(BatchExecutor(client)), PagePolicy(page_size=50))

        runs = []
        async for page in paginator.paginate(
            [
                RequestDescriptor(
                    url=f"/repos/{repo}/actions/runs",
                    params=(f"created={created}",),
                    arrayName="workflow_runs",
                )
            ]
        ):
            runs.extend(page.output.get("workflow_runs", []))
        logger.info(f"Fetched {len(runs)} runs")

        jobs: dict[int, list] = defaultdict(list)
        async for page in paginator.paginate(
            RequestDescriptor(url=run["jobs_url"], arrayName="jobs", run_id=run["id"]) for run in runs
        ):
            jobs[page.context["run_id"]].extend(page.output.get("jobs", []))

        for run in runs:
            print(json.dumps({**run, "jobs": jobs[run["id"]]}))


if __name__ == "__main__":
    if len(sys.argv) != 3:
        sys.exit(__doc__)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
