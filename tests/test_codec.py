"""Tests for dotted quad and subnet parsing."""

import random

import pytest

import areaview
from areaview import (
	InvalidAddressError,
	InvalidSubnetError,
	formatAddress,
	hostBits,
	parseIntQuads,
	parseStrQuads,
	parseSubnet,
)


class TestParseStrQuads:
	"""Tests for parseStrQuads."""

	def test_first_octet_is_most_significant(self):
		assert parseStrQuads('1.0.0.0') == 1 << 24
		assert parseStrQuads('0.0.0.1') == 1
		assert parseStrQuads('192.168.1.2') == 0xc0a80102

	def test_extremes(self):
		assert parseStrQuads('0.0.0.0') == 0
		assert parseStrQuads('255.255.255.255') == 0xffffffff

	@pytest.mark.parametrize('text', [
		'1.2.3',
		'1.2.3.4.5',
		'a.b.c.d',
		'',
		'1..2.3',
		'-1.2.3.4',
		'+1.2.3.4',
		' 1.2.3.4',
		'1.2.3.4/8',
	])
	def test_malformed(self, text):
		with pytest.raises(InvalidAddressError):
			parseStrQuads(text)

	def test_out_of_range_octet_is_rejected(self):
		"""Octets past 255 must not wrap around."""
		with pytest.raises(InvalidAddressError, match='octet 4 out of range'):
			parseStrQuads('10.0.0.256')

	def test_error_is_a_value_error(self):
		with pytest.raises(ValueError, match="illegal address format '1.2.3'"):
			parseStrQuads('1.2.3')

	def test_round_trip(self):
		rng = random.Random(7)
		for _ in range(200):
			quad = '.'.join(str(rng.randint(0, 255)) for _ in range(4))
			assert formatAddress(parseStrQuads(quad)) == quad

	def test_is_valid_address(self):
		assert areaview.isValidAddress('10.0.0.1')
		assert not areaview.isValidAddress('10.0.0')
		assert not areaview.isValidAddress('300.0.0.1')


class TestParseIntQuads:
	"""Tests for parseIntQuads."""

	def test_packs_octets(self):
		assert parseIntQuads(10, 1, 2, 3) == parseStrQuads('10.1.2.3')

	def test_requires_four_octets(self):
		with pytest.raises(TypeError):
			parseIntQuads(10, 1, 2)

	def test_negative_octet(self):
		with pytest.raises(ValueError, match='octet 2'):
			parseIntQuads(10, -1, 2, 3)


class TestFormatAddress:
	"""Tests for formatAddress."""

	def test_format(self):
		assert formatAddress(0x0a010203) == '10.1.2.3'

	def test_out_of_range(self):
		with pytest.raises(ValueError):
			formatAddress(2**32)
		with pytest.raises(ValueError):
			formatAddress(-1)


class TestParseSubnet:
	"""Tests for parseSubnet and isValidSubnet."""

	def test_parse(self):
		assert parseSubnet('10.1.0.0/16') == (parseStrQuads('10.1.0.0'), 16)
		assert parseSubnet('0.0.0.0/0') == (0, 0)
		assert parseSubnet('1.2.3.4/32') == (parseStrQuads('1.2.3.4'), 32)

	def test_host_bits_are_accepted(self):
		assert parseSubnet('10.0.0.1/24') == (parseStrQuads('10.0.0.1'), 24)

	@pytest.mark.parametrize('text', [
		'10.0.0.0',
		'10.0.0.0/33',
		'10.0.0.0/x',
		'10.0.0.0/',
		'10.0.0.0/-1',
		'10.0.0/8',
		'10.0.0.0/8/8',
		'',
	])
	def test_malformed(self, text):
		with pytest.raises(InvalidSubnetError):
			parseSubnet(text)
		assert not areaview.isValidSubnet(text)

	def test_bad_address_reason_is_kept(self):
		with pytest.raises(InvalidSubnetError, match='octet 1 out of range') as excinfo:
			parseSubnet('256.0.0.0/8')
		assert isinstance(excinfo.value.__cause__, InvalidAddressError)


class TestHostBits:
	"""Tests for hostBits and plen2int."""

	def test_netmasks(self):
		assert areaview.plen2int(0) == 0
		assert areaview.plen2int(8) == 0xff000000
		assert areaview.plen2int(32) == 0xffffffff

	def test_host_bits(self):
		assert hostBits(parseStrQuads('10.0.0.0'), 8) == 0
		assert hostBits(parseStrQuads('10.0.0.1'), 24) == 1
		assert hostBits(parseStrQuads('10.0.0.1'), 32) == 0
		assert hostBits(parseStrQuads('10.0.0.1'), 0) == parseStrQuads('10.0.0.1')
