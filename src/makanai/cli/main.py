"""Click CLI group: serve, ask, plan, and models commands."""

from __future__ import annotations

import asyncio
import json

import click

from makanai.client.ai import AIClient, GenerateOptions
from makanai.config import get_settings
from makanai.errors import RequestError
from makanai.plans.fallback import plan_week
from makanai.plans.models import UserProfileForAI
from makanai.providers.catalog import AI_MODELS, DEFAULT_MODELS, PROVIDERS

_provider_option = click.option(
    "--provider",
    type=click.Choice(PROVIDERS),
    default=None,
    help="AI provider (proxy default: gemini).",
)


@click.group()
def cli() -> None:
    """makanai-flow AI proxy CLI."""


@cli.command()
@click.option("--host", type=str, default=None, help="Bind host (default: BIND_HOST).")
@click.option("--port", type=int, default=None, help="Bind port (default: BIND_PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the AI proxy server."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "makanai.main:app",
        host=host or settings.bind_host,
        port=port or settings.bind_port,
        log_config=None,
    )


@cli.command()
@click.argument("message")
@click.option("--system", "system_prompt", type=str, default=None, help="System prompt.")
@_provider_option
@click.option("--model", type=str, default=None, help="Model name (provider default if unset).")
@click.option("--temperature", type=float, default=None)
@click.option("--max-tokens", type=int, default=None)
@click.option("--proxy-url", type=str, default=None, help="Override AI_PROXY_URL.")
@click.option("--json", "json_output", is_flag=True, help="Print the full normalized response.")
def ask(
    message: str,
    system_prompt: str | None,
    provider: str | None,
    model: str | None,
    temperature: float | None,
    max_tokens: int | None,
    proxy_url: str | None,
    json_output: bool,
) -> None:
    """Send one prompt through the proxy and print the reply."""
    client = AIClient(proxy_url)
    options = GenerateOptions(
        provider=provider, model=model, temperature=temperature, max_tokens=max_tokens
    )
    try:
        if json_output:
            messages = [{"role": "user", "content": message}]
            if system_prompt:
                messages.insert(0, {"role": "system", "content": system_prompt})
            response = asyncio.run(client.generate(messages, options))
            click.echo(json.dumps(response, ensure_ascii=False))
            return
        click.echo(asyncio.run(client.ask(message, system_prompt, options)))
    except RequestError as exc:
        raise click.ClickException(str(exc)) from exc


@cli.command()
@click.option("--gender", type=str, required=True)
@click.option("--age", type=int, required=True)
@click.option("--height", type=float, required=True, help="Height in cm.")
@click.option("--weight", type=float, required=True, help="Weight in kg.")
@click.option("--goal", type=str, required=True, help="e.g. 筋肥大, 体力向上, 体型維持.")
@click.option("--environment", type=str, required=True, help="e.g. ジム（マシンあり）.")
@click.option("--session-minutes", type=int, default=40, show_default=True)
@_provider_option
@click.option("--proxy-url", type=str, default=None, help="Override AI_PROXY_URL.")
@click.option("--json", "json_output", is_flag=True, help="Print the plan as JSON.")
def plan(
    gender: str,
    age: int,
    height: float,
    weight: float,
    goal: str,
    environment: str,
    session_minutes: int,
    provider: str | None,
    proxy_url: str | None,
    json_output: bool,
) -> None:
    """Generate this week's training plan, falling back to the fixed plan."""
    profile = UserProfileForAI(
        gender=gender,
        age=age,
        height=height,
        weight=weight,
        goal=goal,
        environment=environment,
        session_minutes=session_minutes,
    )
    result = asyncio.run(
        plan_week(AIClient(proxy_url), profile, GenerateOptions(provider=provider))
    )
    if json_output:
        payload = {
            "source": result.source,
            "error": result.error,
            "plans": [day.to_dict() for day in result.plans],
        }
        click.echo(json.dumps(payload, ensure_ascii=False))
        return
    if result.error:
        click.echo(f"AI generation failed ({result.error}); using fallback plan.", err=True)
    for day in result.plans:
        minutes = "-" if day.is_rest_day else f"{day.total_minutes}min"
        click.echo(f"{day.date} ({day.day_of_week}) {day.body_part} {minutes}")


@cli.command()
def models() -> None:
    """List the models offered per provider."""
    for provider in PROVIDERS:
        click.echo(f"{provider}:")
        for model_id, label in AI_MODELS[provider].items():
            marker = "*" if DEFAULT_MODELS[provider] == model_id else " "
            click.echo(f"  {marker} {model_id}  {label}")


if __name__ == "__main__":
    cli()
