"""
Lead Qualifier - Main Entry Point
=================================
Start the FastAPI server or score a CSV of leads from the command line.

Usage:
    python main.py serve                          # Start server on port 8000
    python main.py serve --port 8080 --reload     # Custom port, auto-reload
    python main.py score leads.csv --offer offer.json --output scored.csv

API Documentation:
    http://localhost:8000/docs        # Swagger UI
    http://localhost:8000/redoc       # ReDoc
"""

import argparse
import json
import logging
import os
import sys

import uvicorn
from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables
load_dotenv()


def configure_logging():
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def serve(args):
    from lead_qualifier.config.settings import LLM_CONFIG
    from lead_qualifier.llm.completion import is_api_key_configured

    llm_status = "Enabled" if is_api_key_configured(LLM_CONFIG["api_key"]) else "Disabled (no API key)"

    print(f"""
╔══════════════════════════════════════════════════════════════╗
║                     LEAD QUALIFIER API                       ║
║                        Version 1.0.0                         ║
╠══════════════════════════════════════════════════════════════╣
║  Server:    http://{args.host}:{args.port}
║  Docs:      http://localhost:{args.port}/docs
║  Health:    http://localhost:{args.port}/api/health
║  LLM:       {llm_status}
╚══════════════════════════════════════════════════════════════╝
    """)

    uvicorn.run(
        "lead_qualifier.api.endpoints:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def score(args) -> int:
    from lead_qualifier.engine import LeadScoringEngine
    from lead_qualifier.models.schemas import Offer, ScoringStats
    from lead_qualifier.models.rubric_config import load_rubric_config
    from lead_qualifier.utils.csv_io import (
        parse_leads_csv,
        export_scored_leads_csv,
        LeadIngestionError,
    )

    try:
        with open(args.offer, "r", encoding="utf-8") as handle:
            offer = Offer.model_validate(json.load(handle))
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        print(f"Error: invalid offer file {args.offer}: {e}", file=sys.stderr)
        return 1

    try:
        with open(args.leads, "rb") as handle:
            leads = parse_leads_csv(handle.read())
    except (OSError, LeadIngestionError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    engine = LeadScoringEngine(rubric=load_rubric_config(args.rubric), max_workers=args.workers)
    results = engine.score_batch(leads, offer)
    content = export_scored_leads_csv(results)

    if args.output:
        with open(args.output, "w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        stats = ScoringStats.from_results(results)
        print(
            f"Scored {stats.total} leads -> {args.output} "
            f"(High: {stats.high}, Medium: {stats.medium}, Low: {stats.low}, "
            f"avg score: {stats.average_score})"
        )
    else:
        sys.stdout.write(content)
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Lead Qualifier")
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve_parser = subparsers.add_parser("serve", help="Start the API server")
    serve_parser.add_argument(
        "--host",
        type=str,
        default="0.0.0.0",
        help="Host to bind the server to (default: 0.0.0.0)",
    )
    serve_parser.add_argument(
        "--port",
        type=int,
        default=8000,
        help="Port to run the server on (default: 8000)",
    )
    serve_parser.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload for development",
    )

    score_parser = subparsers.add_parser("score", help="Score a CSV of leads offline")
    score_parser.add_argument("leads", help="CSV file with name, role, company, industry, location, linkedin_bio")
    score_parser.add_argument("--offer", required=True, help="JSON file with name, value_props, ideal_use_cases")
    score_parser.add_argument("--output", help="Write scored CSV here instead of stdout")
    score_parser.add_argument("--rubric", help="JSON rubric overriding the default keyword tiers")
    score_parser.add_argument("--workers", type=int, default=None, help="Parallel scoring workers")

    args = parser.parse_args(argv)
    configure_logging()

    if args.command == "serve":
        serve(args)
        return 0
    return score(args)


if __name__ == "__main__":
    sys.exit(main())
