"""Simple CLI entry to run a flow or serve the API."""

import argparse
import json
import sys
from pathlib import Path

from visit_nepal.config import configure_logging
from visit_nepal.flows import FLOWS, FlowError


def load_request(path: Path) -> dict:
    return json.loads(path.read_text())


def run_flow(args: argparse.Namespace) -> int:
    flow = FLOWS[args.flow]
    try:
        result = flow(load_request(args.request_file))
    except (ValueError, FlowError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    output = json.dumps(result.model_dump(by_alias=True, exclude_none=True), indent=2, ensure_ascii=False)

    if args.output:
        args.output.write_text(output)
        print(f"Result saved to {args.output}")
    else:
        print(output)
    return 0


def serve(args: argparse.Namespace) -> int:
    import uvicorn

    uvicorn.run("visit_nepal.api:app", host=args.host, port=args.port, reload=args.reload)
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Visit Nepal travel guide flows.")
    parser.add_argument("--log-level", default="", help="Logging level (default: VISIT_NEPAL_LOG_LEVEL or INFO)")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one flow from a JSON request file")
    run_parser.add_argument("flow", choices=sorted(FLOWS), help="Flow to run")
    run_parser.add_argument("request_file", type=Path, help="Path to a JSON file describing the request")
    run_parser.add_argument("--output", type=Path, help="Optional path to save the result JSON")
    run_parser.set_defaults(handler=run_flow)

    serve_parser = subparsers.add_parser("serve", help="Serve the HTTP API with uvicorn")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.add_argument("--reload", action="store_true")
    serve_parser.set_defaults(handler=serve)

    args = parser.parse_args()
    configure_logging(args.log_level.upper())
    sys.exit(args.handler(args))


if __name__ == "__main__":
    main()
