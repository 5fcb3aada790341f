#!/usr/bin/env python3
"""Run one of the Gemini agents and save its answer to a local file."""
import argparse
import sys
from pathlib import Path

from app.agents.simple import SimpleAgent, SimpleSearchAgent
from app.agents.stocks import DEFAULT_HISTORY_FILE, DEFAULT_TICKERS, StockSnapshotAgent
from app.config import AppSettings, load_settings
from app.credentials import ChainedCredentialProvider, EnvCredentialProvider, FileCredentialProvider
from app.observability import MetricsEmitter, ResponseDumper, configure_logging
from app.tools.gemini_client import CompletionClient
from app.tools.grounded_search import GroundedSearchFormatter
from app.tools.transport import HttpxTransport

SIMPLE_PROMPT = "Que número é maior, 3,8 ou 3,72?"
SEARCH_PROMPT = "Quais os valores do dólar e do euro agora?"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description=__doc__)
    commands = parser.add_subparsers(dest="command", required=True)

    simple = commands.add_parser("simple", help="plain completion without search")
    simple.add_argument("--prompt", default=SIMPLE_PROMPT)
    simple.add_argument("--model")
    simple.add_argument("--temperature", type=float)
    simple.add_argument("--output", type=Path, default=Path("response.md"))

    search = commands.add_parser("search", help="grounded search answer with references")
    search.add_argument("--prompt", default=SEARCH_PROMPT)
    search.add_argument("--model", help="search-capable model")
    search.add_argument("--output", type=Path, default=Path("response.md"))

    stocks = commands.add_parser("stocks", help="append one stock price snapshot")
    stocks.add_argument("--tickers", nargs="+", default=list(DEFAULT_TICKERS))
    stocks.add_argument("--model")
    stocks.add_argument("--temperature", type=float)
    stocks.add_argument("--output", type=Path, default=DEFAULT_HISTORY_FILE)
    return parser


def build_components(settings: AppSettings, search_model=None):
    gemini = settings.gemini
    credentials = ChainedCredentialProvider(
        EnvCredentialProvider(gemini),
        FileCredentialProvider(gemini.api_key_file, prompt=input),
    )
    transport = HttpxTransport(timeout_seconds=gemini.timeout_seconds)
    metrics = MetricsEmitter()
    dumper = ResponseDumper(settings.observability.dump_dir)
    formatter = GroundedSearchFormatter(
        credentials,
        transport,
        base_url=gemini.base_url,
        model=search_model or gemini.search_model,
        metrics=metrics,
        dumper=dumper,
    )
    client = CompletionClient(
        credentials,
        transport,
        search=formatter,
        base_url=gemini.base_url,
        metrics=metrics,
        dumper=dumper,
    )
    return formatter, client


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    settings = load_settings()
    configure_logging(settings.observability)

    if args.command == "search":
        formatter, _ = build_components(settings, search_model=args.model)
        result = SimpleSearchAgent(formatter, output_path=args.output).run(args.prompt)
    elif args.command == "simple":
        _, client = build_components(settings)
        agent = SimpleAgent(
            client,
            model=args.model or settings.gemini.model,
            temperature=settings.gemini.temperature if args.temperature is None else args.temperature,
            output_path=args.output,
        )
        result = agent.run(args.prompt)
    else:
        _, client = build_components(settings)
        agent_kwargs = {"tickers": args.tickers, "history_path": args.output}
        if args.model:
            agent_kwargs["model"] = args.model
        if args.temperature is not None:
            agent_kwargs["temperature"] = args.temperature
        entry = StockSnapshotAgent(client, **agent_kwargs).run_once()
        if entry is None:
            print("Falha ao obter preços das ações.", file=sys.stderr)
            return 1
        print(f"Preços das ações salvos em {args.output}")
        return 0

    if not result.ok:
        print(f"Erro ao invocar Gemini: {result.reason}", file=sys.stderr)
        return 1
    print(f"Resposta salva em {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
