# main.py
from __future__ import annotations

import argparse, json, sys
from dataclasses import dataclass
from pathlib import Path
from typing import List, TextIO

from debug import COMPONENTS, Debug
from errors import ConfigurationError, EnigmaError
from keyboard_and_plugboard import Alphabet, plugboard_cycles
from machine import Machine
from permutation import Permutation
from suites import suite_alphabet
from utilities import build_rotor_pool, group_blocks, preprocess_message

# ────────────────────────────────────────────────────────────────────────
#  0. Configuration & logging
# ────────────────────────────────────────────────────────────────────────


debug = Debug()
debug.disable("config")

DEFAULT_CONFIG = Path("enigma_config.json")


@dataclass(slots=True)
class Config:
    """Runtime switches that shape the text going in and out."""

    block: int = 5                  # output group size, 0 for none


def load_config(path: str | Path) -> dict:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    required = {"num_rotors", "pawls", "rotors", "setting"}
    missing = required - data.keys()
    if missing:
        raise ConfigurationError(
            f"Missing keys in config: {', '.join(sorted(missing))}"
        )
    debug.log("config", f"loaded {path}: {sorted(data)}")
    return data


# ────────────────────────────────────────────────────────────────────────
#  1. MachineContext – a configured machine plus its start position
# ────────────────────────────────────────────────────────────────────────


class MachineContext:
    """A thin wrapper so we do not pass the machine and its key around."""

    def __init__(self, machine: Machine, setting: str) -> None:
        self.machine = machine
        self.setting = setting
        self.rewind()

    @classmethod
    def from_config(cls, cfg: dict) -> "MachineContext":
        """Build a MachineContext from a loaded JSON dictionary."""
        if "alphabet" in cfg:
            alphabet = Alphabet(cfg["alphabet"])
        else:
            alphabet = Alphabet(suite_alphabet(cfg.get("suite", "Legacy")))

        pool = build_rotor_pool(alphabet, cfg.get("wheels"))
        machine = Machine(alphabet, int(cfg["num_rotors"]), int(cfg["pawls"]), pool)
        machine.insert_rotors(cfg["rotors"])

        plugs = cfg.get("plugboard", cfg.get("plugs"))
        if plugs:
            machine.set_plugboard(Permutation(plugboard_cycles(plugs), alphabet))

        return cls(machine, cfg["setting"])

    # ––– helpers ––––––––––––––––––––––––––––––––––––––––––––––––

    @property
    def alphabet(self) -> Alphabet:
        return self.machine.alphabet

    def rewind(self) -> None:
        """Reset the rotors to the configured start position."""
        self.machine.set_rotors(self.setting)

    def convert(self, text: str) -> str:
        """Convert TEXT from the current rotor position onward."""
        return self.machine.convert_message(preprocess_message(text, self.alphabet))


# ────────────────────────────────────────────────────────────────────────
#  2. CLI helpers
# ────────────────────────────────────────────────────────────────────────


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Encrypt or decrypt with a rotor machine")
    p.add_argument("--config", metavar="FILE", type=Path, default=DEFAULT_CONFIG,
                   help=f"Machine settings as JSON. Default: {DEFAULT_CONFIG}")
    p.add_argument("-m", "--message", metavar="TEXT",
                   help="Text to convert. If omitted (and no --infile), an interactive REPL starts.")
    p.add_argument("-i", "--infile", metavar="FILE", type=Path,
                   help="Convert every line of FILE.")
    p.add_argument("-o", "--outfile", metavar="FILE", type=Path,
                   help="Write output to FILE instead of stdout.")
    p.add_argument("--block", type=int, default=Config().block,
                   help="Output group size, 0 to disable grouping. Default: 5")
    p.add_argument("--debug", metavar="COMPONENT", action="append", default=[],
                   choices=COMPONENTS, help="Log one component (repeatable).")
    return p.parse_args(argv)


def convert_lines(ctx: MachineContext, lines: List[str], cfg: Config) -> List[str]:
    """Convert LINES in order; the rotors keep moving from one line to the next."""
    return [group_blocks(ctx.convert(line), cfg.block) for line in lines]


def _write(lines: List[str], out: TextIO) -> None:
    for line in lines:
        out.write(line + "\n")


# ────────────────────────────────────────────────────────────────────────
#  3. Main entry point
# ────────────────────────────────────────────────────────────────────────


def main(argv: List[str] | None = None) -> None:
    args = parse_args(argv)
    if args.debug:
        debug.enable(*args.debug)

    try:
        ctx = MachineContext.from_config(load_config(args.config))
    except (OSError, json.JSONDecodeError, EnigmaError) as e:
        sys.exit(f"Failed to load configuration: {e}")

    cfg = Config(block=args.block)

    # one‑shot / file mode -----------------------------------------------
    if args.message is not None or args.infile is not None:
        try:
            if args.message is not None:
                lines = [args.message]
            else:
                lines = args.infile.read_text(encoding="utf-8").splitlines()
            result = convert_lines(ctx, lines, cfg)
        except (OSError, EnigmaError) as e:
            sys.exit(f"Conversion failed: {e}")

        if args.outfile:
            with args.outfile.open("w", encoding="utf-8") as out:
                _write(result, out)
        else:
            _write(result, sys.stdout)
        return

    # interactive REPL ---------------------------------------------------
    print(f"\nLoaded {ctx.machine.num_rotors}-rotor machine at {ctx.setting}.")
    print("Type blank line to quit, '!' to rewind.\n")
    while True:
        txt = input("Message > ")
        if not txt.strip():
            break
        if txt.strip() == "!":
            ctx.rewind()
            print(f"Rewound to {ctx.setting}")
            continue
        try:
            print(group_blocks(ctx.convert(txt), cfg.block))
        except EnigmaError as e:
            print(f"❌  {e}")


if __name__ == "__main__":
    main()
