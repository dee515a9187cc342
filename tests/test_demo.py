"""Tests for the self-test and the command line front end."""

import runpy
import sys
from decimal import Decimal

import numpy as np
import pytest

import rangefp
from rangefp import demo

import support


class TestSelftest:

    def test_passes(self, strategy):
        assert demo.selftest(strategy=strategy) == []

    def test_verbose(self, capsys):
        demo.selftest(verbose=True)
        out = capsys.readouterr().out
        assert 'ok   binary32 INT32_MIN in int32' in out
        assert 'FAIL' not in out


class TestParseValue:

    def test_integers(self):
        assert demo.parse_value('0x7fffff80', rangefp.int_ctx(32)) == 0x7fffff80
        assert demo.parse_value('-17', None) == -17

    def test_hex_floats(self):
        f = demo.parse_value('0x1p-149', support.binary32)
        assert type(f) is np.float32
        assert f == support.binary32.denorm_min()

    def test_decimal(self):
        assert demo.parse_value(' 1.5 ', support.decimal32) == Decimal('1.5')


def run_demo(monkeypatch, *args):
    monkeypatch.setattr(sys, 'argv', ['rangefp.demo'] + list(args))
    runpy.run_module('rangefp.demo', run_name='__main__')


@pytest.mark.filterwarnings('ignore::RuntimeWarning')
class TestCommandLine:

    def test_values(self, monkeypatch, capsys):
        run_demo(monkeypatch, '--dst', 'int32', '--src', 'binary32', '2147483520', '2147483648')
        lines = capsys.readouterr().out.splitlines()
        assert len(lines) == 2
        assert lines[0].endswith(': in range')
        assert lines[1].endswith(': out of range')

    def test_exact_integers(self, monkeypatch, capsys):
        run_demo(monkeypatch, '--dst', 'binary32', '--src', 'exact', str(2 ** 128))
        assert capsys.readouterr().out.strip().endswith('out of range')

    def test_bounds(self, monkeypatch, capsys):
        run_demo(monkeypatch, '--dst', 'int16', '--src', 'binary16', '--bounds', '--portable')
        out = capsys.readouterr().out
        assert out.startswith('float16 values in range of int16: [')

    def test_selftest(self, monkeypatch, capsys):
        run_demo(monkeypatch, '--selftest')
        assert 'self-test passed' in capsys.readouterr().out

    def test_bad_format(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exn:
            run_demo(monkeypatch, '--dst', 'char', '1.0')
        assert exn.value.code == 2
        assert 'error:' in capsys.readouterr().err
