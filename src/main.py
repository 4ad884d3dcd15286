# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

import sys, getopt, logging
from pathlib import Path
from config import Config
from environment import Environment
from plugin_registry import load_plugins_from_config
from logging_utils import configure_logging, get_logger

ROOT_DIR = Path(__file__).resolve().parents[1]
if str(ROOT_DIR) not in sys.path:
    sys.path.append(str(ROOT_DIR))

logger = get_logger("main")

def print_usage(errcode=None):
    """Print usage."""
    print("Usage: python main.py -c <config_file_path> [-f <frames>] [-s <snapshot.png>]")
    sys.exit(errcode)

def main(argv):
    """Parse arguments and run the scenario."""
    configfile = ""
    frames = None
    snapshot = None
    try:
        opts, args = getopt.getopt(argv, "hc:f:s:", ["help", "config=", "frames=", "snapshot="])
    except getopt.GetoptError:
        logging.fatal("Error in parsing command line arguments")
        print_usage(1)
    for opt, arg in opts:
        if opt in ("-h", "--help"):
            print_usage()
        elif opt in ("-c", "--config"):
            configfile = arg
        elif opt in ("-f", "--frames"):
            frames = arg
        elif opt in ("-s", "--snapshot"):
            snapshot = arg
    if not configfile:
        logging.fatal("No configuration file provided")
        print_usage(1)
    try:
        my_config = Config(config_path=configfile)
        if snapshot:
            my_config.data.setdefault("scenario", {}).setdefault("render", {})["snapshot"] = snapshot
        seed = my_config.scenario.get("seed")
        configure_logging(my_config.logging, project_root=ROOT_DIR, run_label=f"seed{seed}" if seed is not None else "")
        load_plugins_from_config(my_config)
        drawing = None
        if my_config.render.get("snapshot"):
            from drawing import MatplotlibDrawing
            drawing = MatplotlibDrawing(view_radius=float(my_config.render.get("view_radius", 40.0)))
        try:
            my_env = Environment(my_config, drawing=drawing)
            respawns = my_env.start(int(frames) if frames is not None else None)
        finally:
            if drawing is not None:
                drawing.close()
        logger.info("Scenario finished with %d respawns", respawns)
    except Exception as e:
        logging.fatal(f"Failed to run scenario: {e}")
        sys.exit(1)
    return 0

def run():
    """Console entry point."""
    return main(sys.argv[1:])

if __name__ == "__main__":
    main(sys.argv[1:])
