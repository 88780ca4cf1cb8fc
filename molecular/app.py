"""
Application entry point — CLI parsing, dependency checks, Qt launch.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__


def _check_deps() -> list:
    missing = []
    try:
        import numpy  # noqa: F401
    except ImportError:
        missing.append("numpy")
    try:
        import PyQt5  # noqa: F401
    except ImportError:
        missing.append("PyQt5")
    return missing


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="molecular",
        description="Molecular Vapor — pointer-reactive particle field.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  %(prog)s                            # default abyss palette\n"
            "  %(prog)s --scheme ember --quality 75\n"
            "  %(prog)s --particle-color '#3a9ad9'  # derive a custom palette\n"
            "  %(prog)s --density 6000             # more particles\n"
            "  %(prog)s --list-schemes             # show available colour schemes\n"
            "  %(prog)s -v                         # verbose logging\n"
        ),
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--scheme", type=str, default="abyss", help="Colour scheme")
    p.add_argument("--particle-color", type=str, default=None,
                   help="Custom particle colour (#rrggbb); overrides --scheme")
    p.add_argument("--quality", type=int, default=50, help="Render quality %% (15–100, default 50)")
    p.add_argument("--density", type=float, default=9000.0,
                   help="Viewport area per particle (1000–100000, default 9000)")
    p.add_argument("--seed", type=int, default=None, help="RNG seed")
    p.add_argument("--width", type=int, default=1100, help="Initial window width")
    p.add_argument("--height", type=int, default=700, help="Initial window height")
    p.add_argument("--list-schemes", action="store_true", help="List colour schemes and exit")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = _parse_args(argv)

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    logger = logging.getLogger("molecular")

    # List schemes
    if args.list_schemes:
        from .palettes import SCHEMES, list_schemes
        print("Available colour schemes:")
        for key in list_schemes():
            s = SCHEMES[key]
            print(f"  {key:12s}  {s.name:12s}  particle=rgb{s.particle}  bg=rgb{s.background}")
        sys.exit(0)

    # Dependency check
    missing = _check_deps()
    if missing:
        print(f"ERROR: Missing packages: {', '.join(missing)}\n"
              f"Install: pip install {' '.join(missing)}", file=sys.stderr)
        sys.exit(1)

    # Validate
    if not (15 <= args.quality <= 100):
        print("ERROR: --quality must be 15–100.", file=sys.stderr)
        sys.exit(1)

    if not (1000 <= args.density <= 100000):
        print("ERROR: --density must be 1000–100000.", file=sys.stderr)
        sys.exit(1)

    if args.width < 320 or args.height < 240:
        print("ERROR: window must be at least 320x240.", file=sys.stderr)
        sys.exit(1)

    from .palettes import SCHEMES, create_custom_scheme, get_scheme, hex_to_rgb
    if args.particle_color:
        try:
            scheme = create_custom_scheme("Custom", hex_to_rgb(args.particle_color))
        except ValueError as e:
            print(f"ERROR: {e}", file=sys.stderr)
            sys.exit(1)
    elif args.scheme in SCHEMES:
        scheme = get_scheme(args.scheme)
    else:
        from .palettes import list_schemes
        avail = ", ".join(list_schemes())
        print(f"ERROR: Unknown scheme '{args.scheme}'. Available: {avail}", file=sys.stderr)
        sys.exit(1)

    # Launch
    logger.info("Starting Molecular Vapor v%s", __version__)
    logger.info("Scheme: %s, Quality: %d%%, Area/particle: %.0f",
                scheme.name, args.quality, args.density)

    from PyQt5.QtWidgets import QApplication
    from .engine import MolecularEngine, SceneParams
    from .main_window import MainWindow

    app = QApplication(sys.argv if argv is None else ["molecular", *argv])
    app.setStyle("Fusion")
    app.setApplicationName("Molecular Vapor")
    app.setApplicationVersion(__version__)

    # Dark theme
    app.setStyleSheet("""
        QMainWindow, QWidget {
            background: #0c0c12;
            color: #a8b4c8;
        }
        QGroupBox {
            font-weight: bold;
            font-size: 12px;
            color: #7fa6c8;
            border: 1px solid #1e2838;
            border-radius: 6px;
            margin-top: 8px;
            padding-top: 14px;
        }
        QGroupBox::title {
            subcontrol-origin: margin;
            subcontrol-position: top left;
            padding: 2px 8px;
        }
        QPushButton {
            background: #141c28;
            border: 1px solid #2a3a50;
            border-radius: 5px;
            padding: 5px 12px;
            color: #a8b4c8;
            font-size: 12px;
        }
        QPushButton:hover {
            background: #1e2838;
            border-color: #3e5472;
        }
        QPushButton:checked {
            background: #1e3d59;
            color: #d8e6f4;
        }
        QComboBox {
            background: #141c28;
            border: 1px solid #2a3a50;
            border-radius: 4px;
            padding: 4px 8px;
            color: #a8b4c8;
            font-size: 12px;
        }
        QSlider::groove:horizontal {
            height: 4px;
            background: #1e2838;
            border-radius: 2px;
        }
        QSlider::handle:horizontal {
            background: #3a7ab0;
            width: 14px;
            height: 14px;
            margin: -5px 0;
            border-radius: 7px;
        }
        QLabel {
            color: #98a6bc;
            font-size: 12px;
        }
        QStatusBar {
            color: #6a7688;
            font-size: 11px;
        }
        QScrollArea {
            background: #0c0c12;
            border: none;
        }
    """)

    params = SceneParams(area_per_particle=args.density)
    engine = MolecularEngine(args.width, args.height, params=params, scheme=scheme, seed=args.seed)

    window = MainWindow(engine, render_scale=args.quality / 100)
    window.resize(args.width, args.height)
    window.show()

    sys.exit(app.exec_())
