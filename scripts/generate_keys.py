"""Generate a PEM key pair for RS*/ES* tokens.

Usage:
    python scripts/generate_keys.py --kind rsa --output-dir ./keys
    python scripts/generate_keys.py --kind ec --curve P-384
"""

import argparse
import logging
from pathlib import Path

from jwtkit.core.keys import EC_CURVES, generate_ec_key_pair, generate_rsa_key_pair, save_key_pair

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate a PEM key pair for signed tokens")
    parser.add_argument("--kind", choices=["rsa", "ec"], default="rsa")
    parser.add_argument("--key-size", type=int, default=2048, choices=[2048, 3072, 4096])
    parser.add_argument("--curve", choices=sorted(EC_CURVES), default="P-256")
    parser.add_argument("--output-dir", default="./keys")
    args = parser.parse_args()

    if args.kind == "rsa":
        logger.info("Generating %s-bit RSA key pair...", args.key_size)
        private_pem, public_pem = generate_rsa_key_pair(key_size=args.key_size)
    else:
        logger.info("Generating EC key pair on %s...", args.curve)
        private_pem, public_pem = generate_ec_key_pair(curve=args.curve)

    output_dir = Path(args.output_dir)
    private_path = output_dir / f"jwt_{args.kind}_private.pem"
    public_path = output_dir / f"jwt_{args.kind}_public.pem"
    save_key_pair(private_pem, public_pem, private_path, public_path)

    logger.info("Private key: %s", private_path)
    logger.info("Public key: %s", public_path)
    logger.info("Set JWT_PRIVATE_KEY_PATH=%s and JWT_PUBLIC_KEY_PATH=%s", private_path, public_path)


if __name__ == "__main__":
    main()
