"""Main script for running TruthLens from the terminal."""

import asyncio
from urllib.parse import urlparse

from dotenv import load_dotenv
from pydantic import ValidationError
from rich import print

from .domain.models.analysis import AnalysisRequest, AnalysisResult, ContentKind, is_valid_url
from .domain.services.credibility_service import CredibilityService
from .domain.services.score_interpreter import credibility_label
from .infrastructure.ai.factory import AIProviderFactory

VIDEO_HOSTS = ("youtube.com", "youtu.be", "vimeo.com", "tiktok.com", "dailymotion.com", "twitch.tv")


def infer_kind(content: str) -> ContentKind:
    """Guess the content kind of raw terminal input."""
    if not is_valid_url(content):
        return ContentKind.TEXT
    host = urlparse(content.strip()).netloc.lower()
    if any(host == h or host.endswith("." + h) for h in VIDEO_HOSTS):
        return ContentKind.VIDEO
    return ContentKind.URL


def print_result(result: AnalysisResult) -> None:
    """Print an analysis result."""
    if result.notice:
        print(f"\n[yellow]{result.notice}[/yellow]")

    print("\n[bold]Results:[/bold]")
    print(f"Credibility: {result.confidence}% ({credibility_label(result.confidence)})")
    print(f"Source: {result.source}")

    sources = result.source_stats
    facts = result.fact_check_stats
    print("\n[dim]Illustrative statistics (synthesized from the score, not measured):[/dim]")
    print(f"Reliable sources: {sources.reliable_count}  Questionable: {sources.questionable_count}  "
          f"Total: {sources.total_checked}")
    print(f"Verified claims: {facts.verified}  Conflicting: {facts.conflicting}  Unverified: {facts.unverified}")

    print("\n[bold]Issues:[/bold]")
    for issue in result.issues:
        print(f"• {issue}")

    print(f"\n{result.narrative}")


async def main():
    """Run TruthLens interactively."""
    load_dotenv()
    print("[bold]TruthLens - content credibility checking[/bold]")
    print("-----------------------------------------")

    # Initialize components
    factory = AIProviderFactory()
    ai_provider = await factory.create_provider("groq")
    service = CredibilityService(ai_provider if ai_provider.is_available else None)

    try:
        while True:
            content = input("\nEnter text, a URL or a video link to check (or 'quit' to exit): ")
            if content.lower() in ('quit', 'exit', 'q'):
                break

            try:
                request = AnalysisRequest(content=content, kind=infer_kind(content))
            except ValidationError as e:
                print(f"\n[red]Please enter valid content to analyze: {e.errors()[0]['msg']}[/red]")
                continue

            print("\nChecking credibility...")
            result = await service.analyze(request)
            print_result(result)

    finally:
        # Clean up
        await factory.shutdown()


def run():
    """Console entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
