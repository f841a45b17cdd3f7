"""
Image processor entry point.

Runs a script of image commands against a fresh in-memory collection.

Usage:
    python image_processor.py                 # read commands from standard input
    python image_processor.py -file script.txt
"""

import logging
import os
import sys

from IP_Libs.constants import SCRIPT_FILE_FLAG
from IP_Libs.ControllerLib import ScriptController


def main() -> None:
    """Main function to run the image processor."""
    logging.basicConfig(
        level=os.environ.get("IP_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    controller = ScriptController()

    if len(sys.argv) >= 2:
        if sys.argv[1] != SCRIPT_FILE_FLAG or len(sys.argv) < 3:
            print("Usage:")
            print("  python image_processor.py")
            print(f"  python image_processor.py {SCRIPT_FILE_FLAG} <script_file>")
            return

        script_path = sys.argv[2]
        if not os.path.isfile(script_path):
            print(f"Error: {script_path} is not a valid file")
            return

        with open(script_path, "r", encoding="utf-8") as script:
            controller.run(script)
        return

    controller.run(sys.stdin)


if __name__ == "__main__":
    main()
