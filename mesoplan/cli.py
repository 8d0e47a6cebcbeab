import argparse
import json
import logging
import sys
from datetime import datetime

import yaml
from pydantic import ValidationError

from mesoplan.application.exceptions import PlanningError
from mesoplan.core.mesocycle_service import generate_mesocycle_plan
from mesoplan.core.plan_context import MesocyclePlanContext
from mesoplan.domain.models import MesocyclePlan, MesocyclePlanRequest
from mesoplan.settings import get_settings


def load_request(path: str) -> MesocyclePlanRequest:
    """Load a plan request from a JSON or YAML file (YAML is a superset of JSON)."""
    with open(path, "r") as f:
        if path.endswith(".json"):
            data = json.load(f)
        else:
            data = yaml.safe_load(f)
    return MesocyclePlanRequest.model_validate(data)


def render_plan(plan: MesocyclePlan, output_format: str) -> str:
    data = plan.model_dump(mode="json")
    if output_format == "json":
        return json.dumps(data, indent=2)
    return yaml.safe_dump(data, sort_keys=False)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate microcycles, sessions and sets for a mesocycle"
    )
    parser.add_argument("input", help="Plan request file path (JSON or YAML)")
    parser.add_argument("-o", "--output", help="Output file path (default: stdout)")
    parser.add_argument(
        "--start-date",
        type=datetime.fromisoformat,
        help="Start of the first generated microcycle (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--format",
        choices=["yaml", "json"],
        default="yaml",
        help="Output format (default: yaml)",
    )

    args = parser.parse_args(argv)

    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        # Load the request
        request = load_request(args.input)

        # Build the context and plan
        context = MesocyclePlanContext(
            mesocycle=request.mesocycle,
            calibrations=request.calibrations,
            exercises=request.exercises,
            equipment_types=request.equipment_types,
            existing_microcycles=request.existing_microcycles,
            existing_sessions=request.existing_sessions,
            existing_session_exercises=request.existing_session_exercises,
            existing_sets=request.existing_sets,
            settings=settings,
        )
        plan = generate_mesocycle_plan(context, start_date=args.start_date)

        # Output result
        rendered = render_plan(plan, args.format)
        if args.output:
            with open(args.output, "w") as f:
                f.write(rendered)
        else:
            print(rendered)

    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        sys.exit(1)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        print(f"Error: Invalid input: {e}", file=sys.stderr)
        sys.exit(1)
    except ValidationError as e:
        print(f"Error: Invalid plan request: {e}", file=sys.stderr)
        sys.exit(1)
    except PlanningError as e:
        print(f"Error: {e} [{e.invariant}]", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
