import numpy as np

from bsc_channel import check_probability
from hamming_codec import to_bits, to_bitstring


class GilbertElliottChannel:
    def __init__(self, p_good_to_bad, p_bad_to_good, ber_good, ber_bad, seed=None):
        self.p_good_to_bad = check_probability("p_good_to_bad", p_good_to_bad)
        self.p_bad_to_good = check_probability("p_bad_to_good", p_bad_to_good)
        self.ber_good = check_probability("ber_good", ber_good)
        self.ber_bad = check_probability("ber_bad", ber_bad)
        self.rng = np.random.default_rng(seed)
        self.state = "good"  # Initial state is "good"

    def reset(self):
        self.state = "good"

    def step(self):
        # State transition based on probabilities
        if self.state == "good" and self.rng.random() < self.p_good_to_bad:
            self.state = "bad"
        elif self.state == "bad" and self.rng.random() < self.p_bad_to_good:
            self.state = "good"

        # Apply BER depending on the state
        ber = self.ber_good if self.state == "good" else self.ber_bad
        return int(self.rng.random() < ber)

    def transmit(self, package):
        data = np.array(to_bits(package), dtype=np.uint8)
        noise = np.array([self.step() for _ in range(len(data))], dtype=np.uint8)
        received = np.bitwise_xor(data, noise)
        if isinstance(package, str):
            return to_bitstring(received)
        return received.tolist()
