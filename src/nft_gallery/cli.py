"""CLI for the gallery (server, search, terminal browser)."""

import asyncio
import json
from pathlib import Path
from typing import Annotated

import typer
from loguru import logger

from nft_gallery.api import ContentStoreClient
from nft_gallery.app import GalleryApp, GalleryContext
from nft_gallery.config import DEFAULT_HOST, IMAGES_MANIFEST, METADATA_MANIFEST
from nft_gallery.core.manifest.loader import load_items
from nft_gallery.core.search.indexer import BackgroundIndexer
from nft_gallery.core.view.state import ESCAPE_KEY, ViewStateMachine
from nft_gallery.errors import ManifestLoadError
from nft_gallery.logging_config import configure_logging
from nft_gallery.models.view import Filter, GalleryFrame

app = typer.Typer(help="NFT gallery: browse and search the collection.")

BROWSE_HELP = """\
Commands:
  s TERM      search (empty TERM clears)
  all|random  switch filter
  more        load the next page
  open ID     click a grid item
  poem        click the poem text
  image       click the full image
  close       close the overlay
  esc         press Escape
  info        show the info popup
  status      show indexing progress
  quit        exit"""


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    configure_logging(verbose=verbose)


def format_frame(frame: GalleryFrame) -> str:
    """Render a frame as plain text."""
    lines: list[str] = []
    if frame.message:
        lines.append(f"! {frame.message}")
    if frame.overlay is not None:
        if frame.overlay.show_poem:
            lines.append(f"[poem] {frame.overlay.poem_title}")
            lines.extend(f"  {line}" for line in frame.overlay.poem_text.splitlines())
        if frame.overlay.show_image:
            lines.append(f"[image] {frame.overlay.image_url}")
        return "\n".join(lines)
    if frame.info_visible:
        lines.append("[info] Click an item for its lore poem, click again for the full image.")

    for cell in frame.cells:
        lines.append(f"  {cell.id:>5}  {cell.title} {cell.label}  {cell.image_url}")
    lines.append(f"Showing {frame.shown_count} of {frame.total_count}")
    if frame.load_more_label:
        lines.append(f"  ({frame.load_more_label}: type 'more')")
    return "\n".join(lines)


def _client(base_url: str | None, proxy_url: str | None) -> ContentStoreClient:
    return ContentStoreClient(base_url=base_url, proxy_url=proxy_url)


@app.command()
def serve(
    host: str = typer.Option(DEFAULT_HOST, "--host", help="Interface to bind"),
    port: Annotated[
        int | None,
        typer.Option("--port", "-p", help="Listen port (default 3001)"),
    ] = None,
    static_dir: Annotated[
        Path | None,
        typer.Option("--static-dir", "-s", help="Directory with the front-end and manifests"),
    ] = None,
) -> None:
    """Start the static file and proxy server."""
    from nft_gallery.server import run_server

    if static_dir is not None and not static_dir.is_dir():
        logger.error("Static directory not found: {}", static_dir)
        raise typer.Exit(1)
    run_server(host=host, port=port, static_dir=static_dir)


@app.command()
def search(
    term: str = typer.Argument(..., help="Search term (substring, case-insensitive)"),
    images: str = typer.Option(IMAGES_MANIFEST, "--images", help="Images manifest"),
    metadata: str = typer.Option(METADATA_MANIFEST, "--metadata", help="Metadata manifest"),
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", "-b", help="Resolve manifests against this URL"),
    ] = None,
    proxy_url: Annotated[
        str | None,
        typer.Option("--proxy", help="Route remote fetches through this proxy endpoint"),
    ] = None,
    index: int = typer.Option(0, "--index", "-i", help="Index the first N items first"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Search the collection by name, id and indexed metadata."""

    async def _run() -> list[dict[str, object]]:
        ctx = GalleryContext(
            fetcher=_client(base_url, proxy_url), images_url=images, metadata_url=metadata
        )
        ctx.items = tuple(await load_items(ctx.fetcher, images, metadata))
        if index > 0:
            indexer = BackgroundIndexer(ctx.items, ctx.store, ctx.index, ctx.fetcher, limit=index)
            await indexer.run()
        view = ViewStateMachine(ctx.items, ctx.index)
        view.set_search_term(term)
        return [
            {
                "id": item.id,
                "name": item.name,
                "image_url": item.image_url,
                "indexed": ctx.index.is_indexed(item.id),
            }
            for item in view.filtered_items()
        ]

    try:
        results = asyncio.run(_run())
    except ManifestLoadError as exc:
        logger.error("{}", exc)
        raise typer.Exit(1) from exc

    if output_json:
        typer.echo(json.dumps({"results": results, "total": len(results)}, indent=2))
        return
    typer.echo(f"Found {len(results)} results:\n")
    for r in results:
        typer.echo(f"  {r['name']}  id={r['id']}  {r['image_url']}")


async def handle_command(gallery: GalleryApp, line: str) -> str | None:
    """Apply one browse command. Returns the text to print, or None to exit."""
    parts = line.split()
    if not parts:
        return format_frame(gallery.frame())
    cmd, args = parts[0].lower(), parts[1:]

    if cmd in ("quit", "q", "exit"):
        return None
    if cmd in ("s", "search"):
        gallery.search_input(" ".join(args))
        return format_frame(await gallery.flush_search())
    if cmd in (Filter.ALL.value, Filter.RANDOM.value):
        return format_frame(gallery.select_filter(cmd))
    if cmd == "more":
        return format_frame(gallery.load_more())
    if cmd == "open" and len(args) == 1 and args[0].isdigit():
        return format_frame(await gallery.click_item(int(args[0])))
    if cmd == "poem":
        return format_frame(gallery.click_poem())
    if cmd == "image":
        return format_frame(gallery.click_image())
    if cmd == "close":
        return format_frame(gallery.close_overlay())
    if cmd == "esc":
        return format_frame(gallery.press_key(ESCAPE_KEY))
    if cmd == "info":
        return format_frame(gallery.show_info())
    if cmd == "status":
        state = "running" if gallery.indexer.is_indexing else "idle"
        return f"Indexed {len(gallery.ctx.index)} of {len(gallery.ctx.items)} items ({state})"
    return BROWSE_HELP


@app.command()
def browse(
    images: str = typer.Option(IMAGES_MANIFEST, "--images", help="Images manifest"),
    metadata: str = typer.Option(METADATA_MANIFEST, "--metadata", help="Metadata manifest"),
    base_url: Annotated[
        str | None,
        typer.Option("--base-url", "-b", help="Resolve manifests against this URL"),
    ] = None,
    proxy_url: Annotated[
        str | None,
        typer.Option("--proxy", help="Route remote fetches through this proxy endpoint"),
    ] = None,
) -> None:
    """Browse the gallery interactively in the terminal."""

    async def _run() -> int:
        ctx = GalleryContext(
            fetcher=_client(base_url, proxy_url), images_url=images, metadata_url=metadata
        )
        gallery = GalleryApp(ctx)
        frame = await gallery.start()
        typer.echo(format_frame(frame))
        if gallery.error is not None:
            return 1
        typer.echo("Type 'help' for commands.")
        try:
            while True:
                try:
                    line = await asyncio.to_thread(input, "> ")
                except EOFError:
                    break
                output = await handle_command(gallery, line)
                if output is None:
                    break
                typer.echo(output)
        finally:
            await gallery.shutdown()
        return 0

    code = asyncio.run(_run())
    if code:
        raise typer.Exit(code)
