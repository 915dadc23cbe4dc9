import argparse
import json
import os
from collections import Counter
from datetime import datetime

from alias_sampler import AliasSampler, describe_buckets


def get_logger(log_file_path, print_to_console=True):
    """
    Returns a logger that writes JSON-formatted logs to file (1 per line).

    Args:
        log_file_path (str): File to append logs to.
        print_to_console (bool): If True, also prints log entries to stdout.

    Returns:
        log_fn (callable): log_fn(message_dict: dict)
    """
    log_dir = os.path.dirname(log_file_path)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    def log_fn(message_dict):
        message_dict["timestamp"] = datetime.now().isoformat()
        line = json.dumps(message_dict)
        with open(log_file_path, "a") as f:
            f.write(line + "\n")
        if print_to_console:
            print(line)

    return log_fn


def format_histogram(weights, counts, scale=1):
    """One line per outcome: index, weight and a bar of count // scale stars."""
    lines = []
    for i, w in enumerate(weights):
        lines.append(f"{i} ({w}) : " + "*" * (counts[i] // scale))
    return "\n".join(lines)


def run(weights, num_samples, seed=None, log_file=None, print_to_console=True):
    """
    Draws `num_samples` outcomes from `weights` and counts them.

    Returns:
        list of int: Number of draws of each outcome.
    """
    if num_samples < 0:
        raise ValueError(f"num_samples must be non-negative. Got {num_samples}.")
    if log_file is None:
        cur_time = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = f"logs/samples_log_{cur_time}.json"
    logger = get_logger(log_file, print_to_console=print_to_console)

    sampler = AliasSampler(weights, rng=seed)
    logger({
        "weights": list(weights),
        "num_samples": num_samples,
        "seed": seed,
        "buckets": [list(b) for b in sampler.buckets],
    })

    counts = [0] * len(sampler)
    for outcome, ct in Counter(sampler.sample_n(num_samples)).items():
        if not 0 <= outcome < len(sampler):
            raise RuntimeError(f"Sampled index {outcome} out of range.")
        counts[outcome] = ct

    logger({
        "counts": counts,
        "frequencies": [ct / num_samples if num_samples else 0.0
                        for ct in counts],
    })
    return counts


def _parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description='Draw samples from a discrete distribution with an alias table.')
    parser.add_argument('--weights', '-w', type=float, nargs='+', required=True,
                        help='Non-negative weight of each outcome.')
    parser.add_argument('--num-samples', '-n', type=int, default=300,
                        help='Number of samples to draw (default = 300).')
    parser.add_argument('--seed', '-s', type=int, default=None,
                        help='Seed for the random source.')
    parser.add_argument('--log-file', '-l', default=None,
                        help='JSON lines log file (default is logs/samples_log_<time>.json).')
    parser.add_argument('--scale', type=int, default=1,
                        help='Draws per star in the histogram (default = 1).')
    parser.add_argument('--show-buckets', action='store_true',
                        help='Print the alias table before sampling.')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Do not echo log entries to stdout.')
    return parser.parse_args(argv)


def main(argv=None):
    args = _parse_args(argv)
    if args.scale < 1:
        raise ValueError(f"scale must be positive. Got {args.scale}.")
    if args.show_buckets:
        print(describe_buckets(AliasSampler(args.weights).table))
    counts = run(
        args.weights,
        args.num_samples,
        seed=args.seed,
        log_file=args.log_file,
        print_to_console=not args.quiet
        )
    print("counts:")
    print(format_histogram(args.weights, counts, scale=args.scale))
    return counts


if __name__ == '__main__':
    main()
