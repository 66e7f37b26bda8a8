import asyncio
from pathlib import Path

import aiohttp
from rich.text import Text

from insta.errors import TopologyFetchError
from insta.output.console import CONSOLE
from insta.output.styles import Style
from insta.topology.loader import load_project

FETCH_TIMEOUT_S = 30


async def fetch_topology(url: str) -> str:
    CONSOLE.print(Text(f'GET {url}', style=Style.context))
    try:
        async with aiohttp.ClientSession(timeout=aiohttp.ClientTimeout(total=FETCH_TIMEOUT_S)) as session:
            async with session.get(url) as response:
                if response.status != 200:
                    raise TopologyFetchError(f"Can't fetch topology from {url}: HTTP {response.status}")
                return await response.text()
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        raise TopologyFetchError(f"Can't fetch topology from {url}: {e!r}") from None


async def update_topology(url: str, destination: Path) -> Path:
    content = await fetch_topology(url)
    # fetched topology replaces the current one only if it loads
    project = load_project(content, working_dir=Path.cwd())

    destination.parent.mkdir(parents=True, exist_ok=True)
    destination.write_text(content)
    CONSOLE.print(
        Text('Topology updated: ', style=Style.info)
        .append(Text(str(destination), style=Style.mark_neutral))
        .append(Text(f' ({len(project)} services)', style=Style.regular))
    )
    return destination
