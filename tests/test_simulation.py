import csv

import pytest

from bsc_channel import BscChannel, flip_bit
from hamming_codec import HammingCodec
from simulation import (
    FrameResult,
    TransmissionSimulator,
    generate_frames,
    print_statistics,
    run_simulation,
    save_results,
)


class SingleErrorChannel:
    """Flips one fixed position of every codeword."""

    def __init__(self, position):
        self.position = position

    def transmit(self, package):
        return flip_bit(package, self.position)


def test_noiseless_channel_delivers_everything():
    simulator = TransmissionSimulator(HammingCodec(), BscChannel(0.0), 11)
    results, error_rate = run_simulation(simulator, generate_frames(11, 20, seed=5))
    assert all(result.delivered for result in results)
    assert all(result.corrected_position == 0 for result in results)
    assert error_rate == 0.0


@pytest.mark.parametrize("position", [1, 3, 8, 15])
def test_single_errors_are_corrected(position):
    simulator = TransmissionSimulator(HammingCodec(), SingleErrorChannel(position), 11)
    results, error_rate = run_simulation(simulator, generate_frames(11, 10, seed=5))
    assert error_rate == 0.0
    assert [result.corrected_position for result in results] == [position] * 10


def test_rtl_codec_round_trips():
    simulator = TransmissionSimulator(HammingCodec(rtl=True), BscChannel(0.0), 6)
    assert simulator.simulate("110100") == FrameResult(6, True, 0, 0)


def test_full_noise_corrupts_frames():
    simulator = TransmissionSimulator(HammingCodec(), BscChannel(1.0), 4)
    result = simulator.simulate("1011")
    assert not result.delivered
    assert result.bit_errors > 0


def test_frame_size_mismatch():
    simulator = TransmissionSimulator(HammingCodec(), BscChannel(0.0), 4)
    with pytest.raises(ValueError, match="4 bits"):
        simulator.simulate("101")


def test_frame_size_must_be_positive():
    with pytest.raises(ValueError):
        TransmissionSimulator(HammingCodec(), BscChannel(0.0), 0)


def test_generate_frames():
    frames = generate_frames(8, 5, seed=11)
    assert len(frames) == 5
    assert all(len(frame) == 8 and set(frame) <= {'0', '1'} for frame in frames)
    assert frames == generate_frames(8, 5, seed=11)


def test_run_simulation_empty():
    simulator = TransmissionSimulator(HammingCodec(), BscChannel(0.0), 4)
    assert run_simulation(simulator, []) == ([], 0.0)


def test_save_results(tmp_path):
    filename = tmp_path / "results.csv"
    save_results(filename, [FrameResult(4, True, 3, 0), FrameResult(4, False, 0, 2)])

    with open(filename, newline='') as file:
        rows = list(csv.reader(file))
    assert rows[0] == ["frame_size", "delivered", "corrected_position", "bit_errors"]
    assert rows[1:] == [["4", "True", "3", "0"], ["4", "False", "0", "2"]]


def test_print_statistics(capsys):
    print_statistics([FrameResult(4, True, 0, 0), FrameResult(4, True, 0, 0),
                      FrameResult(4, False, 0, 1), FrameResult(4, True, 2, 0)])
    out = capsys.readouterr().out
    assert "| delivered |   3   / 4     | 75.000 % |" in out
    assert "|  failed   |   1   / 4     | 25.000 % |" in out


class CountingCodec(HammingCodec):

    def __init__(self):
        super().__init__()
        self.corrections = 0

    def correct(self, codeword):
        self.corrections += 1
        return super().correct(codeword)


def test_each_frame_is_corrected_once():
    codec = CountingCodec()
    simulator = TransmissionSimulator(codec, SingleErrorChannel(6), 11)
    results, _ = run_simulation(simulator, generate_frames(11, 5, seed=2))
    assert codec.corrections == 5
    assert all(result.delivered and result.corrected_position == 6 for result in results)
