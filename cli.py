from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.progress import Progress

from config import LANGUAGE_NAMES, SETTINGS
from parser.html_parser import HTMLDocument
from translator.errors import TranslationCancelled
from translator.google import GoogleTranslator
from translator.orchestrator import TranslationOrchestrator
from translator.page import PageTranslator
from utils.logging_config import configure_logging

app = typer.Typer(add_completion=False)
console = Console()


def _run_async(coro):
    return asyncio.run(coro)


def _build_page_translator(source: str, proxy: str | None) -> PageTranslator:
    translator = GoogleTranslator(
        proxy=proxy or SETTINGS.endpoint.proxy,
        timeout=SETTINGS.endpoint.timeout,
    )
    orchestrator = TranslationOrchestrator(translator, source_lang=source)
    return PageTranslator(orchestrator)


@app.command(help="Translate the visible text of an HTML page")
def translate(
    input: Path = typer.Argument(..., exists=True, readable=True),
    output: Path = typer.Argument(...),
    source: str = typer.Option(SETTINGS.default_source_lang, "--source", "-s", help="Language the page is written in"),
    target: str = typer.Option(SETTINGS.default_target_lang, "--target", "-t"),
    proxy: str | None = typer.Option(None, help="Proxy URL for the translation endpoint"),
    log_file: Path | None = typer.Option(None, help="Also write debug logs to this file"),
) -> None:
    configure_logging(log_file)
    document = HTMLDocument.from_file(input)
    page = _build_page_translator(source, proxy)

    async def runner() -> bool:
        try:
            with Progress(console=console) as progress:
                task_id = progress.add_task(f"Translating to {LANGUAGE_NAMES.get(target, target)}", total=None)

                def progress_callback(done: int, total: int) -> None:
                    progress.update(task_id, completed=done, total=total)

                return await page.translate_page(document, target, progress_cb=progress_callback)
        finally:
            await page.orchestrator.translator.close()

    try:
        changed = _run_async(runner())
    except TranslationCancelled:
        raise typer.Exit(code=1)
    if not changed:
        console.print(f"Page is already in {LANGUAGE_NAMES.get(target, target)}")
    output_path = document.write(output)
    console.print(f"Saved translated page to {output_path}")


@app.command(help="Translate strings given on the command line")
def text(
    texts: List[str] = typer.Argument(...),
    source: str = typer.Option(SETTINGS.default_source_lang, "--source", "-s"),
    target: str = typer.Option(SETTINGS.default_target_lang, "--target", "-t"),
    proxy: str | None = typer.Option(None, help="Proxy URL for the translation endpoint"),
) -> None:
    configure_logging(level="WARNING")
    page = _build_page_translator(source, proxy)

    async def runner() -> List[str]:
        try:
            return await page.translate_texts(texts, target)
        finally:
            await page.orchestrator.translator.close()

    for translated in _run_async(runner()):
        console.print(translated)


if __name__ == "__main__":
    app()
