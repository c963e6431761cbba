"""Command line front end for the pog toolkit.

Usage:
    pog generate --length 12 --symbols --count 3
    pog wep 128 --output ascii
    pog hash secret --salt 'Xy7#' --digest sha512 --format base64
    pog authenticate secret 5e88489... --salt 'Xy7#'
    pog strength 'correct horse' --level high
    pog config set digest sha512

Defaults come from ``pog.settings.effective_settings()``.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__, settings
from .digests import HashFormat
from .errors import PogError
from .password import Password, authenticate
from .password_tests import PasswordTests, entropy, qualitative_strength, strength_label
from .policy import load_policy
from .random_source import make_random_source
from .random_string_generator import (
    GeneratorOptions,
    RandomStringGenerator,
    generate_wep,
    shuffle_string,
)
from .salt import Salt, generate_salt_value

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="pog", description="Password generation, hashing and strength tools")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--seed", type=int, default=None, help="Seed a pseudo-random source for reproducible output")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser("generate", help="Generate random passwords")
    g.add_argument("--length", type=int, default=None)
    g.add_argument("--count", type=int, default=1)
    g.add_argument("--symbols", action="store_true")
    g.add_argument("--no-lower", action="store_true")
    g.add_argument("--no-upper", action="store_true")
    g.add_argument("--no-numerals", action="store_true")
    g.add_argument("--single-quotes", action="store_true")
    g.add_argument("--double-quotes", action="store_true")
    g.add_argument("--backtick", action="store_true")
    g.add_argument("--no-duplicates", action="store_true")
    g.add_argument("--special", default=None, help="Literal characters to draw from (overrides class flags)")

    s = sub.add_parser("salt", help="Generate a random salt")
    s.add_argument("--length", type=int, default=None)

    w = sub.add_parser("wep", help="Generate a WEP key")
    w.add_argument("bits", type=int)
    w.add_argument("--output", default="hex", help="hex or ascii")

    h = sub.add_parser("hash", help="Hash a password")
    h.add_argument("password")
    h.add_argument("--salt", default=None)
    h.add_argument("--placement", default=None)
    h.add_argument("--digest", default=None)
    h.add_argument("--format", default=None)

    a = sub.add_parser("authenticate", help="Check a password against a stored hash")
    a.add_argument("password")
    a.add_argument("hash")
    a.add_argument("--salt", default=None)
    a.add_argument("--placement", default=None)

    st = sub.add_parser("strength", help="Score a password and run strength rules")
    st.add_argument("password")
    grp = st.add_mutually_exclusive_group()
    grp.add_argument("--level", default=None)
    grp.add_argument("--policy", default=None, help="Path to a JSON password policy")

    sh = sub.add_parser("shuffle", help="Shuffle the characters of a string")
    sh.add_argument("text")

    c = sub.add_parser("config", help="Show or change stored settings")
    c.add_argument("action", choices=["show", "set", "reset", "path"])
    c.add_argument("key", nargs="?")
    c.add_argument("value", nargs="?")
    return p


def _salt_from_args(args, cfg) -> Optional[Salt]:
    if args.salt is None:
        return None
    return Salt(args.salt, args.placement or cfg["salt_placement"])


def _cmd_generate(args, cfg, rng) -> int:
    opts = GeneratorOptions(
        lower_alphas=not args.no_lower,
        upper_alphas=not args.no_upper,
        numerals=not args.no_numerals,
        symbols=args.symbols,
        single_quotes=args.single_quotes,
        double_quotes=args.double_quotes,
        backtick=args.backtick,
        no_duplicates=args.no_duplicates,
        special=args.special,
    )
    length = args.length if args.length is not None else cfg["password_length"]
    rsg = RandomStringGenerator(length, opts, rng)
    for _ in range(max(args.count, 0)):
        print(rsg.generate())
    return 0


def _cmd_hash(args, cfg, rng) -> int:
    password = Password(args.password, _salt_from_args(args, cfg), args.digest or cfg["digest"])
    fmt = HashFormat.parse(args.format or cfg["hash_format"])
    out = password.hash(fmt)
    if fmt is HashFormat.BINARY:
        sys.stdout.buffer.write(out)
        sys.stdout.flush()
    else:
        print(out)
    return 0


def _cmd_authenticate(args, cfg, rng) -> int:
    ok = authenticate(args.password, _salt_from_args(args, cfg), args.hash)
    print("OK" if ok else "FAILED")
    return 0 if ok else 1


def _cmd_strength(args, cfg, rng) -> int:
    if args.policy:
        results = load_policy(args.policy).check(args.password)
    else:
        params = PasswordTests.default_test_params(args.level or cfg["strength_level"])
        results = PasswordTests(args.password, params).run()
    for name, passed in results.items():
        print(f"{name}: {'pass' if passed else 'fail'}")
    score = qualitative_strength(args.password)
    print(f"strength: {score} ({strength_label(score)})")
    print(f"entropy: {entropy(args.password):.2f} bits")
    return 0 if all(results.values()) else 1


def _cmd_config(args, cfg, rng) -> int:
    if args.action == "show":
        print(json.dumps(cfg, indent=2, sort_keys=True))
    elif args.action == "path":
        print(settings.settings_path())
    elif args.action == "set":
        if args.key not in settings.DEFAULTS or args.value is None:
            print(f"usage: pog config set KEY VALUE (keys: {', '.join(settings.DEFAULTS)})", file=sys.stderr)
            return 2
        settings.set_setting(args.key, args.value)
    elif args.action == "reset":
        if not args.key:
            print("usage: pog config reset KEY", file=sys.stderr)
            return 2
        settings.reset_setting(args.key)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        cfg = settings.effective_settings()
        rng = make_random_source(cfg["random_source"], args.seed)
        cmd = args.command
        if cmd == "generate":
            return _cmd_generate(args, cfg, rng)
        if cmd == "salt":
            length = args.length if args.length is not None else cfg["salt_length"]
            print(generate_salt_value(length, rng))
            return 0
        if cmd == "wep":
            print(generate_wep(args.bits, args.output, rng))
            return 0
        if cmd == "hash":
            return _cmd_hash(args, cfg, rng)
        if cmd == "authenticate":
            return _cmd_authenticate(args, cfg, rng)
        if cmd == "strength":
            return _cmd_strength(args, cfg, rng)
        if cmd == "shuffle":
            print(shuffle_string(args.text, rng))
            return 0
        if cmd == "config":
            return _cmd_config(args, cfg, rng)
    except (PogError, ValueError) as e:
        logger.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 2


if __name__ == "__main__":
    sys.exit(main())
