"""Commands that start the game and the launcher that runs it from its folder."""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from typing import Optional, Sequence

from .instance import ProgramLock


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the game unless another copy is already running."""
    parser = argparse.ArgumentParser(prog="groveengine", description="Run the game.")
    parser.add_argument("--root", default=".", help="folder that holds res/")
    parser.add_argument("--headless", action="store_true",
                        help="draw off-screen without opening a window")
    parser.add_argument("--lock-dir", default=None,
                        help="folder for the single-instance lock file")
    args = parser.parse_args(argv)

    with ProgramLock("main", args.lock_dir) as lock:
        if lock.is_other_program_on():
            return 0
        import pygame

        from .game import Game

        game = Game(args.root, headless=args.headless)
        try:
            game.run()
        finally:
            pygame.quit()
    return 0


def launcher(argv: Optional[Sequence[str]] = None) -> int:
    """Change into the game folder and start the game command there.

    Arguments after ``--`` replace the command that is started.
    """
    argv = list(sys.argv[1:] if argv is None else argv)
    if "--" in argv:
        split = argv.index("--")
        options, command = argv[:split], argv[split + 1:]
    else:
        options, command = argv, []

    parser = argparse.ArgumentParser(prog="groveengine-start",
                                     description="Start the game from its folder.")
    parser.add_argument("--dir", default="bin", help="folder to run the game in")
    parser.add_argument("--lock-dir", default=None,
                        help="folder for the single-instance lock file")
    args = parser.parse_args(options)
    if not command:
        command = [sys.executable, "-m", "groveengine.cli"]

    with ProgramLock("start", args.lock_dir) as lock:
        if lock.is_other_program_on():
            return 0
        try:
            os.chdir(args.dir)
            print("dir changed")
        except OSError as exc:
            print(f"dir bad change: {exc.strerror}", file=sys.stderr)
        sys.stdout.flush()
        subprocess.run(command, check=False)
    return 0


if __name__ == "__main__":
    sys.exit(main())