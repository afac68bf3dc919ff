import argparse
import logging
import sys

import numpy as np
import yaml

from bsc_channel import BscChannel
from gilbert_elliott_channel import GilbertElliottChannel
from hamming_codec import HammingCodec
from simulation import TransmissionSimulator, generate_frames, print_statistics, run_simulation, save_results

HELP = """Encode, decode and correct (single bit) a binary code using Hamming code.

Usage: hamcode [command] [binary code] [--rtl]

Available Commands:
  correct            Print the corrected binary code
  encode             Print the encoded data binary using Hamming code
  decode             Print the data binary code inside the input Hamming code
  simulate           Send random data through a noisy channel and report
  help, -h, --help   Print the help

Options:
  --rtl              Read the data binary code right to left
  --position         (correct) Also print the position of the flipped bit
  --config PATH      (simulate) YAML file with the simulation parameters
  --channel NAME     (simulate) bsc or gilbert_elliott
  -v, --verbose      Print debug logging"""

COMMANDS = ("correct", "encode", "decode", "simulate")
BINARY_COMMANDS = ("correct", "encode", "decode")

DEFAULT_CONFIG = {
    'frame_size': 11,
    'n_frames': 256,
    'seed': None,
    'ber': 0.01,
    'p_good_to_bad': 0.1,
    'p_bad_to_good': 0.3,
    'ber_good': 0.001,
    'ber_bad': 0.025,
    'results_file': '',
}


class CommandParser(argparse.ArgumentParser):

    def error(self, message):
        raise ValueError(f"{message}\nSee 'hamcode help'.")


def _number(config, key, kind, filename):
    try:
        return kind(config[key])
    except (TypeError, ValueError) as e:
        raise ValueError(f"{filename}: invalid {key}: {config[key]!r}") from e


def read_yaml_config(filename):
    try:
        with open(filename, 'r') as file:
            config = yaml.safe_load(file) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"{filename}: invalid YAML: {e}") from e
    if not isinstance(config, dict):
        raise ValueError(f"{filename}: config must be a mapping")
    config = {**DEFAULT_CONFIG, **config}

    for key in ('frame_size', 'n_frames'):
        config[key] = _number(config, key, int, filename)
    for key in ('ber', 'p_good_to_bad', 'p_bad_to_good', 'ber_good', 'ber_bad'):
        config[key] = _number(config, key, float, filename)

    seed = config['seed']
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int) or seed < 0):
        raise ValueError(f"{filename}: seed must be a non-negative integer or empty, got {seed!r}")
    return config


def spawn_seeds(seed):
    # Independent streams for the data frames and the channel noise
    frame_seed, channel_seed = np.random.SeedSequence(seed).spawn(2)
    return frame_seed, channel_seed


def validate_binary(text):
    # Checks if all chars are 0 or 1
    if any(char not in '01' for char in text):
        raise ValueError("Invalid binary code.")
    return text


def build_parser():
    common = CommandParser(add_help=False)
    common.add_argument('-v', '--verbose', action='store_true')

    parser = CommandParser(prog='hamcode', add_help=False)
    subparsers = parser.add_subparsers(dest='command')

    for command in BINARY_COMMANDS:
        sub = subparsers.add_parser(command, prog=f'hamcode {command}', parents=[common], add_help=False)
        sub.add_argument('binary', nargs='?')
        sub.add_argument('--rtl', action='store_true')
    subparsers.choices['correct'].add_argument('--position', action='store_true')

    sub = subparsers.add_parser('simulate', prog='hamcode simulate', parents=[common], add_help=False)
    sub.add_argument('--config', default='config.yaml')
    sub.add_argument('--channel', choices=['bsc', 'gilbert_elliott'], default='bsc')
    return parser


def make_channel(name, config, seed=None):
    if name == 'gilbert_elliott':
        return GilbertElliottChannel(config['p_good_to_bad'], config['p_bad_to_good'],
                                     config['ber_good'], config['ber_bad'], seed=seed)
    return BscChannel(config['ber'], seed=seed)


def simulate(args):
    config = read_yaml_config(args.config)
    frame_size = config['frame_size']
    frame_seed, channel_seed = spawn_seeds(config['seed'])

    channel = make_channel(args.channel, config, seed=channel_seed)
    simulator = TransmissionSimulator(HammingCodec(), channel, frame_size)
    frames = generate_frames(frame_size, config['n_frames'], seed=frame_seed)
    results, error_rate = run_simulation(simulator, frames)

    print(f"Simulation with {args.channel} channel:")
    print_statistics(results)
    print(f"\nError rate of whole transmission: {error_rate:.6f}")

    if config['results_file']:
        save_results(config['results_file'], results)
        print(f"Results saved in '{config['results_file']}'")


def run(args):
    if args.command == 'simulate':
        simulate(args)
        return

    if args.binary is None:
        raise ValueError(f"{args.command}: Command needs a binary code.")
    binary = validate_binary(args.binary)
    codec = HammingCodec(rtl=args.rtl)

    if args.command == 'encode':
        print(codec.encode(binary))
    elif args.command == 'decode':
        print(codec.decode(binary))
    else:
        corrected, position = codec.correct(binary)
        print(corrected)
        if args.position:
            print(position)


def main(argv=None):
    argv = sys.argv[1:] if argv is None else list(argv)

    # Checks if help output is asked
    if not argv or argv[0] == 'help' or '-h' in argv or '--help' in argv:
        print(HELP)
        return 0

    if argv[0] not in COMMANDS:
        print(f"{argv[0]}: Unknown command\nSee 'hamcode help'.", file=sys.stderr)
        return 1

    try:
        args, unknown = build_parser().parse_known_args(argv)
        if unknown:
            raise ValueError(f"Unknown option '{unknown[0]}'.\nSee 'hamcode help'.")

        logging.basicConfig(format='%(levelname)s %(name)s: %(message)s')
        logging.getLogger().setLevel(logging.DEBUG if args.verbose else logging.WARNING)

        run(args)
    except (ValueError, OSError) as e:
        print(e, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
