import csv
import logging
from collections import Counter
from typing import List, NamedTuple, Tuple

import numpy as np

from hamming_codec import HammingCodec

logger = logging.getLogger(__name__)


class FrameResult(NamedTuple):
    frame_size: int
    delivered: bool
    corrected_position: int
    bit_errors: int


class TransmissionSimulator:
    def __init__(self, codec: HammingCodec, channel, frame_size: int):
        if frame_size <= 0:
            raise ValueError(f"frame_size must be positive, got {frame_size}")
        self.codec = codec
        self.channel = channel
        self.frame_size = frame_size

    def simulate(self, frame: str) -> FrameResult:
        if len(frame) != self.frame_size:
            raise ValueError(f"Frame must be {self.frame_size} bits long, got {len(frame)}")

        logger.debug("Original Data: %s", frame)
        encoded = self.codec.encode(frame)  # FEC encoding
        logger.debug("Encoded Data: %s", encoded)

        received = self.channel.transmit(encoded)
        logger.debug("Received Data: %s", received)

        corrected, position = self.codec.correct(received)
        decoded = self.codec.data_bits(corrected)
        logger.debug("Decoded Data: %s (corrected position %d)", decoded, position)

        bit_errors = sum(a != b for a, b in zip(frame, decoded))
        return FrameResult(self.frame_size, bit_errors == 0, position, bit_errors)


def generate_frames(frame_size: int, n_frames: int, seed=None) -> List[str]:
    rng = np.random.default_rng(seed)
    frames = rng.integers(0, 2, size=(n_frames, frame_size))
    return [''.join(str(bit) for bit in row) for row in frames]


def run_simulation(simulator: TransmissionSimulator, frames: List[str]) -> Tuple[List[FrameResult], float]:
    results = []
    total_bits = 0
    total_errors = 0
    for frame in frames:
        result = simulator.simulate(frame)
        results.append(result)
        total_bits += len(frame)
        total_errors += result.bit_errors

    error_rate = total_errors / total_bits if total_bits > 0 else 0.0
    logger.info("Simulated %d frames, residual bit error rate %.6f", len(results), error_rate)
    return results, error_rate


def save_results(filename: str, results: List[FrameResult]):
    with open(filename, 'w', newline='') as file:
        writer = csv.writer(file)
        writer.writerow(["frame_size", "delivered", "corrected_position", "bit_errors"])
        writer.writerows(results)


def print_statistics(results: List[FrameResult]):
    outcomes = Counter(result.delivered for result in results)
    total = len(results)

    print("| Outcome   | number / all  | % of time |")
    print("|-----------|---------------|-----------|")

    for label, delivered in (("delivered", True), ("failed", False)):
        count = outcomes[delivered]
        percentage = (count / total) * 100 if total else 0.0
        print(f"| {label:^9} | {count:^5} / {total:<5} | {percentage:^7.3f}% |")
