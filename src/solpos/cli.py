"""CLI entry point for solar position calculations.

    uv run solpos --when "1999-07-22 09:45:37" --lat 33.65 --lon -84.43 \\
        --tz America/Atikokan --press 1006 --temp 27 --tilt 33.65 --aspect 135 --compare

Latitude, longitude and time zone default to SOLPOS_LATITUDE,
SOLPOS_LONGITUDE and SOLPOS_TZ (a .env file is honoured). Without a time
zone, it is looked up from the coordinates.
"""

import argparse
import logging
import os
import sys
from datetime import datetime

from dotenv import load_dotenv

load_dotenv()

from pytz import timezone  # noqa: E402
from pytz.exceptions import InvalidTimeError, UnknownTimeZoneError  # noqa: E402
from timezonefinder import TimezoneFinder  # noqa: E402

from solpos import config  # noqa: E402
from solpos.calculator import Solpos, sun_path  # noqa: E402
from solpos.errors import SolposError  # noqa: E402
from solpos.report import (  # noqa: E402
    NREL_AIRMASS_SWEEP,
    airmass_sweep,
    compare_with_reference,
    format_comparison,
)

logger = logging.getLogger(__name__)

_OUTPUTS = (
    "zenetr", "zenref", "elevref", "azim", "declin", "hrang", "eqntim",
    "amass", "ampress", "etrn", "etr", "etrtilt", "cosinc", "sbcf", "prime", "unprime",
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="solpos", description="Solar position and extraterrestrial irradiance"
    )
    parser.add_argument("--when", required=True, help='Local time, "YYYY-MM-DD HH:MM[:SS]"')
    parser.add_argument("--lat", type=float, default=config.env_float(config.ENV_LATITUDE))
    parser.add_argument("--lon", type=float, default=config.env_float(config.ENV_LONGITUDE))
    parser.add_argument("--tz", default=os.environ.get(config.ENV_TZ) or None,
                        help="IANA time zone name")
    parser.add_argument("--press", type=float, default=config.DEFAULT_PRESS)
    parser.add_argument("--temp", type=float, default=config.DEFAULT_TEMP)
    parser.add_argument("--tilt", type=float, default=config.DEFAULT_TILT)
    parser.add_argument("--aspect", type=float, default=config.DEFAULT_ASPECT)
    parser.add_argument("--compare", action="store_true",
                        help="Print the NREL reference table and air-mass sweep")
    parser.add_argument("--chart",
                        help="Save the day's sun path here (.html: interactive Plotly, else PNG)")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _parse_when(when: str) -> datetime:
    for fmt in ("%Y-%m-%d %H:%M:%S", "%Y-%m-%d %H:%M"):
        try:
            return datetime.strptime(when, fmt)
        except ValueError:
            continue
    raise ValueError(f"unrecognised time {when!r}, expected YYYY-MM-DD HH:MM[:SS]")


def _resolve_tz(name: str | None, lat: float, lon: float):
    if name is None:
        name = TimezoneFinder().timezone_at(lat=lat, lng=lon)
        if name is None:
            raise ValueError(f"Timezone not found: lat={lat}, lng={lon}")
        logger.info("Resolved time zone %s from coordinates", name)
    return timezone(name)


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    level = logging.DEBUG if args.verbose else os.environ.get(config.ENV_LOG_LEVEL, "WARNING")
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.lat is None or args.lon is None:
        print("Latitude and longitude are required (--lat/--lon or environment)", file=sys.stderr)
        return 2

    try:
        tz = _resolve_tz(args.tz, args.lat, args.lon)
        local_dt = tz.localize(_parse_when(args.when), is_dst=None)
    except (ValueError, UnknownTimeZoneError, InvalidTimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    options = {"press": args.press, "temp": args.temp, "tilt": args.tilt, "aspect": args.aspect}
    try:
        sp = Solpos(local_dt, args.lat, args.lon, options)
    except SolposError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(sp)
    for name in _OUTPUTS:
        print(f"{name:>8}  {getattr(sp.result, name):.6f}")
    sunrise, sunset = sp.sunrise(), sp.sunset()
    print(f"{'sunrise':>8}  {sunrise.isoformat() if sunrise else 'none (24-hour day or night)'}")
    print(f"{'sunset':>8}  {sunset.isoformat() if sunset else 'none (24-hour day or night)'}")

    if args.chart:
        from pathlib import Path

        points = sun_path(local_dt.date(), args.lat, args.lon, tz, options=options)
        title = f"{args.when} {tz.zone}"
        path = Path(args.chart)
        if path.suffix.lower() == ".html":
            from solpos.renderers.plotly_2d import render_plotly_chart

            path.parent.mkdir(parents=True, exist_ok=True)
            render_plotly_chart(points, title=title).write_html(path)
        else:
            from solpos.renderers.static import save_static_chart

            path = save_static_chart(points, path, title=title)
        print(f"Saved: {path}")

    if args.compare:
        print()
        print(format_comparison(compare_with_reference(sp)))
        print()
        print("NREL    -> " + "  ".join(f"{v:.2f}" for v in NREL_AIRMASS_SWEEP))
        print("SOLPOS  -> " + "  ".join(f"{v:.2f}" for v in airmass_sweep(sp)))

    return 0


if __name__ == "__main__":
    sys.exit(main())
