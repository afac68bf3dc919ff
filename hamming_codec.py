from typing import List, Sequence, Tuple, Union

Bits = Union[str, Sequence[int]]


def is_parity_position(position: int) -> bool:
    # Parity bits live at power of 2 positions (1-based)
    return position > 0 and (position & (position - 1)) == 0


def to_bits(bitstring: Bits) -> List[int]:
    # Anything other than '1' counts as 0
    if isinstance(bitstring, str):
        return [1 if char == '1' else 0 for char in bitstring]
    return [int(bit) for bit in bitstring]


def to_bitstring(bits: Sequence[int]) -> str:
    return ''.join('1' if bit else '0' for bit in bits)


def parity_bit(bits: Sequence[int], position: int) -> int:
    """XOR of every bit covered by the parity bit at `position`, excluding itself."""
    parity_value = 0
    for i in range(1, len(bits) + 1):
        if i != position and i & position:
            parity_value ^= bits[i - 1]
    return parity_value


def error_position(parities: Sequence[int]) -> int:
    """
    Assemble the syndrome from parity mismatches ordered from the lowest
    parity position to the highest. The first mismatch is the least
    significant bit, so the result is the 1-based error position (0 if none).
    """
    position = 0
    for weight, mismatch in enumerate(parities):
        position |= (mismatch & 1) << weight
    return position


def _syndrome(bits: List[int]) -> int:
    parities = []
    for position in range(1, len(bits) + 1):
        if is_parity_position(position):
            parities.append(parity_bit(bits, position) ^ bits[position - 1])
    return error_position(parities)


def correct(codeword: Bits) -> Tuple[str, int]:
    bits = to_bits(codeword)
    position = _syndrome(bits)

    # Syndromes pointing past the end cannot be corrected
    if position == 0 or position > len(bits):
        return to_bitstring(bits), 0

    bits[position - 1] ^= 1  # Flip the detected error bit
    return to_bitstring(bits), position


def encode(data: Bits) -> str:
    data = to_bits(data)
    hamming_code = []

    # Place the data bits, leaving a 0 in every parity slot
    data_index = 0
    position = 1
    while data_index < len(data):
        if is_parity_position(position):
            hamming_code.append(0)
        else:
            hamming_code.append(data[data_index])
            data_index += 1
        position += 1

    # Calculate the parity bits
    for position in range(1, len(hamming_code) + 1):
        if is_parity_position(position):
            hamming_code[position - 1] = parity_bit(hamming_code, position)

    return to_bitstring(hamming_code)


def data_bits(codeword: Bits) -> str:
    # Extract the original data bits, no correction
    data = []
    for position, char in enumerate(to_bitstring(to_bits(codeword)), start=1):
        if not is_parity_position(position):
            data.append(char)
    return ''.join(data)


def decode(codeword: Bits) -> str:
    corrected, _ = correct(codeword)
    return data_bits(corrected)


class HammingCodec:
    """
    Hamming codec over bitstrings of any length.

    With rtl=True the data side is read right to left: the input of encode()
    and the output of decode() are reversed. correct() always works left to
    right on the codeword.
    """

    def __init__(self, rtl=False):
        self.rtl = rtl

    def encode(self, data: Bits) -> str:
        data = to_bitstring(to_bits(data))
        if self.rtl:
            data = data[::-1]
        return encode(data)

    def data_bits(self, codeword: Bits) -> str:
        data = data_bits(codeword)
        if self.rtl:
            data = data[::-1]
        return data

    def decode(self, codeword: Bits) -> str:
        data = decode(codeword)
        if self.rtl:
            data = data[::-1]
        return data

    def correct(self, codeword: Bits) -> Tuple[str, int]:
        return correct(codeword)
