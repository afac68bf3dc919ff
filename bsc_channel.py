import numpy as np

from hamming_codec import to_bits, to_bitstring


def check_probability(name, value):
    if not 0.0 <= value <= 1.0:
        raise ValueError(f"{name} must be between 0 and 1, got {value}")
    return float(value)


def flip_bit(bits, position):
    # Flip a single 1-based position, e.g. to inject one error into a codeword
    flipped = to_bits(bits)
    if not 1 <= position <= len(flipped):
        raise ValueError(f"Position {position} outside of 1..{len(flipped)}")
    flipped[position - 1] ^= 1
    return to_bitstring(flipped) if isinstance(bits, str) else flipped


class BscChannel:
    def __init__(self, ber, seed=None):
        self.ber = check_probability("ber", ber)
        self.rng = np.random.default_rng(seed)

    def noise(self, size):
        return (self.rng.random(size) < self.ber).astype(np.uint8)

    def transmit(self, package):
        data = np.array(to_bits(package), dtype=np.uint8)
        received = np.bitwise_xor(data, self.noise(len(data)))
        if isinstance(package, str):
            return to_bitstring(received)
        return received.tolist()
