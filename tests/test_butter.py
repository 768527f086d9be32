import numpy as np
import pytest
from scipy import signal

from sigproc.errors import InvalidArgument
from sigproc.preprocessing.butter import butter_sos_even, design_lowpass_sos


def test_odd_order_rejected():
    with pytest.raises(InvalidArgument):
        butter_sos_even(5, 0.5)


def test_non_positive_order_rejected():
    with pytest.raises(InvalidArgument):
        butter_sos_even(0, 0.5)
    with pytest.raises(InvalidArgument):
        butter_sos_even(-2, 0.5)


def test_cutoff_out_of_range():
    with pytest.raises(InvalidArgument):
        butter_sos_even(2, -1.0)
    with pytest.raises(InvalidArgument):
        butter_sos_even(2, 2.0)


def test_second_order_coefficients():
    # reference coefficients from Octave / Matlab
    (f,) = butter_sos_even(2, 0.2)
    assert f.b0 == pytest.approx(0.067455, abs=1e-6)
    assert f.b1 == pytest.approx(0.134911, abs=1e-6)
    assert f.b2 == pytest.approx(0.067455, abs=1e-6)
    assert f.a1 == pytest.approx(-1.14298, abs=1e-5)
    assert f.a2 == pytest.approx(0.4128, abs=1e-4)

    (g,) = butter_sos_even(2, 0.5)
    assert g.b0 == pytest.approx(0.29289, abs=1e-5)
    assert g.b1 == pytest.approx(0.58579, abs=1e-5)
    assert g.b2 == pytest.approx(0.29289, abs=1e-5)
    assert g.a1 == pytest.approx(0.0, abs=1e-10)
    assert g.a2 == pytest.approx(0.17157, abs=1e-5)

    (h,) = butter_sos_even(2, 0.04)
    assert h.b0 == pytest.approx(0.0036, abs=1e-4)
    assert h.b1 == pytest.approx(0.0072, abs=1e-4)
    assert h.b2 == pytest.approx(0.0036, abs=1e-4)
    assert h.a1 == pytest.approx(-1.8227, abs=1e-4)
    assert h.a2 == pytest.approx(0.8372, abs=1e-4)


@pytest.mark.parametrize("order,wn", [(2, 0.2), (4, 0.08), (6, 0.3), (8, 0.6)])
def test_cascade_equals_scipy_transfer_function(order, wn):
    sections = butter_sos_even(order, wn)
    assert len(sections) == order // 2
    b, a = np.array([1.0]), np.array([1.0])
    for s in sections:
        b = np.convolve(b, s.b)
        a = np.convolve(a, s.a)
    b_ref, a_ref = signal.butter(order, wn)
    np.testing.assert_allclose(b, b_ref, rtol=1e-8, atol=1e-12)
    np.testing.assert_allclose(a, a_ref, rtol=1e-8, atol=1e-12)


def test_unity_dc_gain():
    for s in butter_sos_even(4, 0.25):
        assert sum(s.b) / sum(s.a) == pytest.approx(1.0)


def test_design_from_hz():
    assert design_lowpass_sos(500.0, 20.0, order=4) == butter_sos_even(4, 0.08)
    with pytest.raises(InvalidArgument):
        design_lowpass_sos(0.0, 20.0)
    with pytest.raises(InvalidArgument):
        design_lowpass_sos(500.0, 300.0)
