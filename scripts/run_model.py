# scripts/run_model.py
# Run the configured engine once, outside the HTTP server, and print the parsed results.
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

import asyncio

from oil_model_server.application.engine import SubprocessEngine
from oil_model_server.application.engine_output import parse_output
from oil_model_server.config.settings import get_settings
from oil_model_server.domain.models.simulation import SimulationParameters


async def run_once(args):
    settings = get_settings()
    engine = SubprocessEngine(
        settings.engine_command(),
        cwd=settings.model_dir,
        timeout_seconds=settings.engine_timeout_seconds,
    )
    params = SimulationParameters(
        scenario=int(args[0]) if len(args) > 0 else 1,
        drilling_rate=int(args[1]) if len(args) > 1 else 50,
        oil_price=float(args[2]) if len(args) > 2 else 80.0,
        exchange_rate=float(args[3]) if len(args) > 3 else 75.0,
    ).normalized()
    results = parse_output(await engine.run(params))
    for r in results:
        print(r.to_dict())
    print("Results:", len(results))

asyncio.run(run_once(sys.argv[1:]))
