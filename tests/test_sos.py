from decimal import Decimal
from fractions import Fraction
from itertools import islice

import numpy as np
import pytest
from scipy import signal

from sigproc.errors import InvalidArgument
from sigproc.preprocessing.butter import butter_sos_even
from sigproc.preprocessing.filtfilt import filtfilt
from sigproc.preprocessing.filters import lfilter
from sigproc.preprocessing.sos import (
    SOSSection,
    StreamingSOS,
    as_sections,
    sosfilt,
    sosfilt_zi,
    sosfiltfilt,
)

X10 = [1.0, 2, 3, 4, 5, 6, 7, 8, 9, 10]
TABLE = [
    [1, 2, 1, 1, -1.5752, 0.6263],
    [1, 2, 1, 1, -1.7688, 0.8262],
]


def test_boxcar_section():
    f = SOSSection(0.5, 0.5, 0.0, 0.0, 0.0)
    y = list(f(X10))
    np.testing.assert_allclose(y, np.arange(1, 11) - 0.5, atol=1e-10)


def test_from_coefficients_normalizes_by_a0():
    s = SOSSection.from_coefficients(2.0, 4.0, 2.0, 2.0, 1.0, 0.5)
    assert s == SOSSection(1.0, 2.0, 1.0, 0.5, 0.25)
    assert s.a == (1.0, 0.5, 0.25)
    with pytest.raises(InvalidArgument):
        SOSSection.from_coefficients(1.0, 1.0, 1.0, 0.0, 1.0, 1.0)


def test_butterworth_stack():
    # expected output generated with Octave
    stack = butter_sos_even(4, 0.2)
    expected = [0.0048243, 0.0403774, 0.1665251, 0.4606177, 0.9793515,
                1.7315426, 2.6772461, 3.7467150, 4.8657874, 5.9763508]
    y = list(sosfilt(stack, X10))
    np.testing.assert_allclose(y, expected, atol=1e-7)


def test_table_cascade():
    # Matlab output, without gain
    expected = np.array([0.0010, 0.0093, 0.0440, 0.1420, 0.3582, 0.7612,
                         1.4265, 2.4282, 3.8372, 5.7059]) * 1000.0
    y = list(sosfilt(np.array(TABLE), X10))
    np.testing.assert_allclose(y, expected, atol=1.0)
    assert list(sosfilt(TABLE, X10)) == y


@pytest.mark.parametrize("table", [
    [[1, 2, 1, 1, -1.5, 0.6, 0.0]],
    [[1, 2, 1, 1, -1.5]],
    [1, 2, 1, 1, -1.5, 0.6],
    np.zeros((0, 6)),
    [],
])
def test_table_shape_validated(table):
    with pytest.raises(InvalidArgument):
        sosfilt(table, X10)


def test_cascade_matches_direct_fourth_order():
    s1, s2 = butter_sos_even(4, 0.3)
    b = np.convolve(s1.b, s2.b)
    a = np.convolve(s1.a, s2.a)
    rng = np.random.default_rng(2)
    x = rng.standard_normal(256)
    direct = np.asarray(list(lfilter(b, a, x)))
    cascade = np.asarray(list(sosfilt([s1, s2], x)))
    np.testing.assert_allclose(cascade, direct, rtol=1e-4, atol=1e-10)


def test_sections_applied_in_given_order():
    s1, s2 = SOSSection(1.0, 0.5, 0.0, 0.0, 0.0), SOSSection(2.0, 0.0, 0.0, -0.5, 0.0)
    assert list(sosfilt([s1, s2], X10)) == list(s2(s1(X10)))


def test_sosfilt_is_lazy():
    pulls = 0

    def zeros():
        nonlocal pulls
        while True:
            pulls += 1
            yield 0.0

    y = sosfilt(TABLE, zeros())
    assert pulls == 0
    next(y)
    assert pulls == 1
    list(islice(y, 5))
    assert pulls == 6
    next(y)
    assert pulls == 7


def test_sosfilt_zi_matches_scipy():
    stack = butter_sos_even(6, 0.15)
    table = np.array([[*s.b, *s.a] for s in stack])
    np.testing.assert_allclose(sosfilt_zi(stack), signal.sosfilt_zi(table), atol=1e-10)


def test_as_sections_accepts_single_section():
    s = SOSSection(1.0, 0.0, 0.0, 0.0, 0.0)
    assert as_sections(s) == [s]


def test_streaming_blocks_match_one_shot():
    stack = butter_sos_even(4, 0.1)
    rng = np.random.default_rng(3)
    x = rng.standard_normal(300)
    f = StreamingSOS(stack)
    f.reset(zero=True)
    blocks = [f.process(x[i:i + 37]) for i in range(0, x.size, 37)]
    np.testing.assert_allclose(np.concatenate(blocks), list(sosfilt(stack, x)), atol=1e-12)


def test_streaming_reset_is_step_steady_state():
    f = StreamingSOS(butter_sos_even(4, 0.1))
    np.testing.assert_allclose(f.process(np.ones(25)), np.ones(25), atol=1e-10)
    f.reset()
    np.testing.assert_allclose(f.process(np.ones(5)), np.ones(5), atol=1e-10)


def test_sosfiltfilt_is_sectionwise_filtfilt():
    stack = butter_sos_even(4, 0.08)
    n = np.arange(300)
    x = np.sin(2 * np.pi * n / 100.0) + 0.2 * np.sin(2 * np.pi * n / 7.0)
    expected = filtfilt(stack[1].b, stack[1].a, filtfilt(stack[0].b, stack[0].a, x))
    np.testing.assert_allclose(sosfiltfilt(stack, x), expected, atol=1e-12)
    # high frequency component removed, slow one kept without lag
    np.testing.assert_allclose(sosfiltfilt(stack, x)[50:250], np.sin(2 * np.pi * n / 100.0)[50:250], atol=0.02)


def test_section_keeps_fractions_exact():
    s = SOSSection.from_coefficients(
        Fraction(1), Fraction(2), Fraction(1), Fraction(2), Fraction(1, 2), Fraction(1, 4)
    )
    y = list(s.apply([Fraction(1), Fraction(0), Fraction(0)]))
    assert all(isinstance(v, Fraction) for v in y)
    assert y == [Fraction(1, 2), Fraction(7, 8), Fraction(7, 32)]


def test_section_with_decimal_coefficients():
    s = SOSSection(Decimal("0.5"), Decimal("0.5"), Decimal(0), Decimal(0), Decimal(0))
    y = list(sosfilt([s], [Decimal(1), Decimal(3)]))
    assert all(isinstance(v, Decimal) for v in y)
    assert y == [Decimal("0.5"), Decimal("2.0")]


def test_as_sections_copies_the_callers_list():
    cascade = [SOSSection(1.0, 0.0, 0.0, 0.0, 0.0)]
    sections = as_sections(cascade)
    assert sections == cascade
    assert sections is not cascade

    streaming = StreamingSOS(cascade)
    cascade.append(SOSSection(0.5, 0.0, 0.0, 0.0, 0.0))
    assert len(streaming.sections) == 1


def test_mixed_sections_and_rows_rejected():
    with pytest.raises(InvalidArgument):
        as_sections([SOSSection(1.0, 0.0, 0.0, 0.0, 0.0), [1.0, 0.0, 0.0, 1.0, 0.0, 0.0]])
