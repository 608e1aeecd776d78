"""CLI entry point for scrapeslayer."""

from __future__ import annotations

import asyncio
import logging
import sys
from dataclasses import replace

import click

from scrapeslayer import __version__
from scrapeslayer.config import Config
from scrapeslayer.models import BatchResult, OutputFormat, ScrapingResult


async def _run(
    value: str | None,
    batch: str | None,
    links_file: str | None,
    platform: str,
    config: Config,
) -> ScrapingResult | BatchResult:
    """Scrape a single creator or a whole batch with one renderer session."""
    from scrapeslayer.batch import BatchProcessor, FixedDelay
    from scrapeslayer.platforms import get_platform
    from scrapeslayer.renderer import build_renderer
    from scrapeslayer.scraper import CreatorScraper

    scraper = CreatorScraper(
        build_renderer(config),
        platform=None if platform == "auto" else get_platform(platform),
        config=config,
    )
    try:
        await scraper.initialize()

        if value is not None:
            click.echo(f"Scraping: {value}", err=True)
            result = await scraper.scrape_creator(value)
            if result.success and result.data is not None:
                click.echo(f"✓ Successfully scraped: {result.data.display_name or value}", err=True)
            else:
                click.echo(f"✗ Failed to scrape: {value} - {result.error}", err=True)
            return result

        processor = BatchProcessor(scraper, FixedDelay(config.batch_delay))
        if links_file is not None:
            return await processor.process_file(links_file)
        return await processor.process_string(batch or "")
    finally:
        await scraper.close()


@click.command()
@click.argument("value", metavar="[INPUT]", required=False)
@click.option("--format", "-f", "fmt", type=click.Choice([f.value for f in OutputFormat]), default="json", show_default=True, help="Output format")
@click.option("--output", "-o", default=None, help="Output file (default: stdout)")
@click.option("--batch", "-b", default=None, help="Comma-separated list of creators")
@click.option("--file", "links_file", default=None, help="File containing list of creators (one per line)")
@click.option("--platform", "-p", type=click.Choice(["auto", "twitch", "youtube"]), default="auto", show_default=True, help="Platform for bare usernames and URLs")
@click.option("--renderer", type=click.Choice(["browser", "http"]), default=None, help="Page renderer (headless Chromium or plain HTTP)")
@click.option("--delay", type=float, default=None, help="Seconds to wait between batch items")
@click.option("--headful", is_flag=True, help="Show the browser window")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.version_option(__version__, prog_name="scrapeslayer")
def main(
    value: str | None,
    fmt: str,
    output: str | None,
    batch: str | None,
    links_file: str | None,
    platform: str,
    renderer: str | None,
    delay: float | None,
    headful: bool,
    verbose: bool,
) -> None:
    """scrapeslayer — creator profile scraper for Twitch and YouTube about pages."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        stream=sys.stderr,
    )

    config = Config.from_env()
    overrides: dict[str, object] = {}
    if renderer:
        overrides["renderer"] = renderer
    if delay is not None:
        overrides["batch_delay"] = delay
    if headful:
        overrides["headless"] = False
    if overrides:
        config = replace(config, **overrides)

    input_count = sum(1 for given in (value, batch, links_file) if given)
    if input_count == 0:
        click.echo("Error: Must provide either a creator input, --batch, or --file option", err=True)
        sys.exit(1)
    if input_count > 1:
        click.echo("Error: Cannot use multiple input methods simultaneously", err=True)
        sys.exit(1)

    try:
        result = asyncio.run(_run(value, batch, links_file, platform, config))
    except Exception as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    from scrapeslayer.output import format_result, write_report

    text = format_result(result, fmt)
    if output:
        write_report(text, output)
        click.echo(f"Results written to: {output}", err=True)
    else:
        click.echo(text)


if __name__ == "__main__":
    main()
