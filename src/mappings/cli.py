"""
Command-line interface for the mappings package.
"""

import argparse
import math
import sys
from typing import Dict, List, Optional

import torch

from .config import DTYPES, SYSTEMS, ModelConfig, build_model
from .dynamics import Henon, Pendulum, PendulumWithTorque, is_autonomous, is_exogenous


def print_vector(title: str, values: torch.Tensor) -> None:
    print(title)
    for value in values.tolist():
        print(f"{value:g}")


def run_demo(dtype: torch.dtype = torch.float64) -> Dict[str, torch.Tensor]:
    """
    Evaluate the reference models once, reusing a single output buffer.

    Returns the right-hand side of each model keyed by its printed title.
    """
    results = {}
    x = torch.tensor([math.pi / 2.0, 0.0], dtype=dtype)
    dxdt = torch.empty(2, dtype=dtype)

    p0 = Pendulum(1.0, 1.0)
    p0(x, out=dxdt)
    results["Pendulum (autonomous, endogenous)"] = dxdt.clone()

    p1 = PendulumWithTorque(1.0, 1.0, 1.0)
    u = torch.tensor([2.0], dtype=dtype)
    dxdt.fill_(-2.0)
    p1(x, u, out=dxdt)
    results["Pendulum (autonomous, exogenous)"] = dxdt.clone()

    h = Henon()
    x.zero_()
    h(x, out=dxdt)
    results["Henon (autonomous, endogenous)"] = dxdt.clone()

    for title, rhs in results.items():
        print_vector(title, rhs)
    return results


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Mappings - Evaluate right-hand sides of dynamical systems"
    )

    parser.add_argument(
        "--system",
        choices=list(SYSTEMS),
        default=None,
        help="System to evaluate (runs the reference demo if omitted)"
    )
    parser.add_argument(
        "--state",
        type=float,
        nargs="+",
        default=None,
        help="State vector x"
    )
    parser.add_argument(
        "--input",
        type=float,
        nargs="+",
        default=None,
        help="Exogenous input vector u"
    )
    parser.add_argument(
        "--time",
        type=float,
        default=0.0,
        help="Independent variable for non-autonomous systems"
    )

    defaults = ModelConfig()
    for field in ("length", "gravity", "mass", "amplitude", "frequency", "a", "b"):
        parser.add_argument(
            f"--{field}",
            type=float,
            default=getattr(defaults, field),
            help=f"Model parameter {field} (default: {getattr(defaults, field)})"
        )

    parser.add_argument(
        "--dtype",
        choices=list(DTYPES),
        default=defaults.dtype,
        help="Numeric type of states and right-hand sides"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.system is None:
        run_demo(DTYPES[args.dtype])
        return 0

    config = ModelConfig(
        system_type=args.system,
        length=args.length,
        gravity=args.gravity,
        mass=args.mass,
        amplitude=args.amplitude,
        frequency=args.frequency,
        a=args.a,
        b=args.b,
        dtype=args.dtype,
    )
    model = build_model(config)

    if args.state is None:
        parser.error(f"--state is required for {model.name}")
    if len(args.state) != model.state_dim:
        parser.error(f"{model.name} expects {model.state_dim} state values, got {len(args.state)}")
    x = torch.tensor(args.state, dtype=config.torch_dtype)

    call_args = [x]
    if not is_autonomous(model):
        call_args.insert(0, args.time)
    if is_exogenous(model):
        if args.input is None or len(args.input) != model.input_dim:
            parser.error(f"{model.name} expects {model.input_dim} input values")
        call_args.append(torch.tensor(args.input, dtype=config.torch_dtype))
    elif args.input is not None:
        parser.error(f"{model.name} takes no exogenous input")

    print_vector(str(model), model(*call_args))
    return 0


if __name__ == "__main__":
    sys.exit(main())
