"""CLI entry point."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Optional

import typer
from dotenv import load_dotenv

from unoengine.config import EngineConfig

if TYPE_CHECKING:
    from unoengine.agent.protocol import AgentProtocol

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="UNO rules engine with CPU, LLM and human players")


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
) -> dict[str, "AgentProtocol"]:
    from unoengine.agents import CpuAgent, HumanAgent, LLMAgent

    parts = [s.strip() for s in agent_specs.split(",") if s.strip()]
    if len(parts) < 2:
        raise typer.BadParameter("At least two agents are needed.")
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model
        kind = kind.strip().lower()

        if kind == "cpu":
            agents[pid] = CpuAgent(name=f"CPU_{i}")
        elif kind == "llm":
            agents[pid] = LLMAgent(provider=llm_provider, model=model)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        else:
            raise typer.BadParameter(f"Unknown agent type: {kind}. Use 'cpu', 'llm' or 'human'.")
    return agents


def _load_config(seed: Optional[int], log_level: Optional[str]) -> EngineConfig:
    config = EngineConfig.from_env(load_dotenv_file=False)
    if seed is not None:
        config = replace(config, seed=seed)
    if log_level:
        config = replace(config, log_level=log_level)
    config.configure_logging()
    return config


@app.command()
def play(
    agents: str = typer.Option(
        "human,cpu,cpu,cpu",
        "--agents",
        "-a",
        help="Comma-separated: cpu, human, llm, or llm:model_name (e.g. human,cpu,llm:gpt-4o)",
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Logging level"),
) -> None:
    """Run a single UNO game."""
    from unoengine.orchestration.game_runner import GameRunner

    config = _load_config(seed, log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model)
    runner = GameRunner(agent_map, config=config)
    result = runner.run()
    if result.aborted:
        typer.echo("Match aborted: the deck ran out of cards.", err=True)
        raise typer.Exit(code=2)
    typer.echo(f"Winner: {result.winner or 'None (turn limit reached)'}")
    typer.echo(f"Turns: {result.num_turns}")


@app.command()
def tournament(
    agents: str = typer.Option(
        "cpu,cpu",
        "--agents",
        "-a",
        help="Comma-separated agent types or llm:model_name (e.g. cpu,llm:llama3)",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    log_level: Optional[str] = typer.Option(None, "--log-level", "-l", help="Logging level"),
) -> None:
    """Run a tournament."""
    from unoengine.orchestration.tournament import run_tournament

    config = _load_config(seed, log_level)
    agent_map = _parse_agents(agents, llm_provider, llm_model)
    wins = run_tournament(agent_map, num_games=games, seed=config.seed, config=config)
    typer.echo("Tournament results:")
    for pid, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {pid}: {w} wins")


if __name__ == "__main__":
    app()
