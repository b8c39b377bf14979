"""
areaview - A module which maps IPv4 addresses to named areas (DNS views)
by longest-prefix match over a binary trie of subnet to area assignments.

EXAMPLES:

	>>> import areaview
	>>> areaview.isValidAddress('1.2.3.4')
	True
	>>> areaview.isValidAddress('1.2.3')
	False
	>>> areaview.isValidAddress('1.2.3.256')
	False
	>>> areaview.parseStrQuads('10.1.2.3')
	167838211
	>>> areaview.formatAddress(167838211)
	'10.1.2.3'
	>>> areaview.parseSubnet('10.1.0.0/16')
	(167837696, 16)
	>>> trie = areaview.ViewTrie()
	>>> trie.insert(areaview.parseStrQuads('10.0.0.0'), 8, areaview.Entry('A', '10.0.0.0/8'))
	>>> trie.insert(areaview.parseStrQuads('10.1.0.0'), 16, areaview.Entry('B', '10.1.0.0/16'))
	>>> trie.lookup(areaview.parseStrQuads('10.1.2.3')).area
	'B'
	>>> trie.lookup(areaview.parseStrQuads('10.2.2.3')).area
	'A'
	>>> print(trie.lookup(areaview.parseStrQuads('11.0.0.0')))
	None

"""

__copyright__ = """
Copyright (c) 2016, Steve Benson
All rights reserved.

Redistribution and use in source and binary forms, with or without
modification, are permitted provided that the following conditions are met:

	* Redistributions of source code must retain the above copyright notice,
	  this list of conditions and the following disclaimer.

	* Redistributions in binary form must reproduce the above copyright
	  notice, this list of conditions and the following disclaimer in the
	  documentation and/or other materials provided with the distribution.

	* Neither the name of the author nor the names of its
	  contributors may be used to endorse or promote products derived from
	  this software without specific prior written permission.

THIS SOFTWARE IS PROVIDED BY THE COPYRIGHT HOLDERS AND CONTRIBUTORS "AS IS"
AND ANY EXPRESS OR IMPLIED WARRANTIES, INCLUDING, BUT NOT LIMITED TO, THE
IMPLIED WARRANTIES OF MERCHANTABILITY AND FITNESS FOR A PARTICULAR PURPOSE
ARE DISCLAIMED. IN NO EVENT SHALL THE COPYRIGHT OWNER OR CONTRIBUTORS BE
LIABLE FOR ANY DIRECT, INDIRECT, INCIDENTAL, SPECIAL, EXEMPLARY, OR
CONSEQUENTIAL DAMAGES (INCLUDING, BUT NOT LIMITED TO, PROCUREMENT OF
SUBSTITUTE GOODS OR SERVICES; LOSS OF USE, DATA, OR PROFITS; OR BUSINESS
INTERRUPTION) HOWEVER CAUSED AND ON ANY THEORY OF LIABILITY, WHETHER IN
CONTRACT, STRICT LIABILITY, OR TORT (INCLUDING NEGLIGENCE OR OTHERWISE)
ARISING IN ANY WAY OUT OF THE USE OF THIS SOFTWARE, EVEN IF ADVISED OF THE
POSSIBILITY OF SUCH DAMAGE.
"""

from collections import namedtuple

__version__='0.1.0'
__author__='Steve Benson'
__date__='2026-oct-18'

def plen2int(plen):
	"""Takes an integer in 0..32 (a subnet mask expressed in "slash"
	notation) and returns a 32 bit unsigned integer representing the netmask."""
	return (2**plen-1) * 2**(32-plen)

def _bits32(i):
	"""Truncates an integer to 32 bits."""
	return i&4294967295

def hostBits(addr, plen):
	"""Returns the bits of addr which lie past a prefix of length plen."""
	return addr & _bits32(~plen2int(plen))


class InvalidAddressError(ValueError):
	def __init__(self, text, reason):
		ValueError.__init__(self, text, reason)
		self.text = text
		self.reason = reason
	def __str__(self):
		return 'illegal address format %s: %s' % (repr(self.text), self.reason)

class InvalidSubnetError(ValueError):
	def __init__(self, text, reason):
		ValueError.__init__(self, text, reason)
		self.text = text
		self.reason = reason
	def __str__(self):
		return 'illegal subnet format %s: %s' % (repr(self.text), self.reason)

class DuplicateSubnetError(Exception):
	def __init__(self, entry, existing):
		Exception.__init__(self, entry, existing)
		self.entry = entry
		self.existing = existing
	def __str__(self):
		return 'duplicate subnet: %s (already assigned to area %s by %s)' % (
			self.entry.subnet,
			self.existing.area,
			self.existing.subnet
		)


def parseIntQuads(*quads):
	
	'''given four integers that are the octets of an IP address, return the
	ip address as an integer. The first octet lands in the most
	significant byte.'''
	
	if len(quads)!=4:
		raise TypeError('parseIntQuads takes exactly 4 int arguments')
	
	addr=0
	for i in range(4):
		oc = quads[i]
		if oc < 0 or oc > 255:
			raise ValueError('octet %d out of range' % (i+1))
		addr = (addr << 8) | oc
	return addr

def parseStrQuads(s):
	
	'''given a string of the form 'x.x.x.x', return it as an IP number
	integer. Raises InvalidAddressError for anything else.'''
	
	parts = s.split('.')
	
	if len(parts)!=4:
		raise InvalidAddressError(s, 'expected 4 dot-separated parts, got %d' % len(parts))
	
	for p in parts:
		if not (p.isascii() and p.isdigit()):
			raise InvalidAddressError(s, 'non-digit dot-separated part %s' % repr(p))

	parts = [int(p) for p in parts]

	try:
		return parseIntQuads(*parts)
	except ValueError as ve:
		raise InvalidAddressError(s, str(ve)) from ve

def formatAddress(i):

	'''given a 32 bit IP number integer, return it in dotted quad form.'''

	if not (0 <= i <= 2**32-1):
		raise ValueError('Invalid integer IPv4 number: %d (out of range)' % i)
	return '%d.%d.%d.%d' % (
		(i >> 24) & 255,
		(i >> 16) & 255,
		(i >> 8) & 255,
		i & 255
	)

def parseSubnet(s):

	'''given a string of the form 'x.x.x.x/y', return a tuple of (address
	integer, prefix length). Raises InvalidSubnetError if the string is
	not a subnet or the prefix length is outside 0..32. Host bits past the
	prefix length are not an error.'''

	parts = s.split('/')
	if len(parts)!=2:
		raise InvalidSubnetError(s, 'expected address/prefix length')

	try:
		addr = parseStrQuads(parts[0])
	except InvalidAddressError as iae:
		raise InvalidSubnetError(s, iae.reason) from iae

	plen_s = parts[1]
	if not (plen_s.isascii() and plen_s.isdigit()):
		raise InvalidSubnetError(s, 'non-digit prefix length %s' % repr(plen_s))
	plen = int(plen_s)
	if plen > 32:
		raise InvalidSubnetError(s, 'prefix length %d out of range' % plen)

	return (addr, plen)

def isValidAddress(s):
	
	'''is the given string a valid IPv4 Address (in dotted quad form)'''

	try:
		parseStrQuads(s)
		return True
	except InvalidAddressError:
		return False

def isValidSubnet(s):

	'''is the given string a valid IPv4 subnet (i.e. in the form
	10.0.0.0/24)'''

	try:
		parseSubnet(s)
		return True
	except InvalidSubnetError:
		return False


class Entry(namedtuple('Entry', ['area', 'subnet'])):

	"""The payload bound to a subnet in a ViewTrie: the area label and the
	subnet text it was configured from."""

	__slots__ = ()

	def __str__(self):
		return '%s %s' % (self.area, self.subnet)


class ViewNode(object):

	"""One slot of a ViewTrie's node arena. left and right are arena
	indexes (or None) of the children for a 0 and a 1 bit respectively."""

	__slots__ = ('left', 'right', 'entry')

	def __init__(self):
		self.left = None
		self.right = None
		self.entry = None


class ViewTrie(object):

	"""A binary trie over the 32 bit IPv4 address space. Each node sits at
	the depth equal to the number of address bits consumed to reach it, so
	an entry attached at depth n belongs to a prefix of length n. The root
	(depth 0) is the catch-all for every address.

	Nodes are held in a list and refer to each other by index, the root
	being index 0. Nodes are never removed, and an entry once attached is
	never replaced."""

	def __init__(self):
		self._nodes = [ViewNode()]
		self._count = 0

	def __len__(self):
		"""Returns the number of entries in the trie."""
		return self._count

	def node_count(self):
		"""Returns the number of allocated nodes, root included."""
		return len(self._nodes)

	def insert(self, address, prefix_len, entry):

		"""Attach entry to the prefix made of the leading prefix_len bits
		of address. Raises DuplicateSubnetError, leaving the existing entry
		in place, if that prefix already carries an entry."""

		if not (0 <= prefix_len <= 32):
			raise ValueError('Invalid value %d for prefix len (out of range)' % prefix_len)
		if not (0 <= address <= 2**32-1):
			raise ValueError('Invalid integer IPv4 number: %d (out of range)' % address)

		nodes = self._nodes
		bit = 0x80000000
		index = 0
		depth = 0

		# follow the existing path as far as it goes
		while depth < prefix_len:
			node = nodes[index]
			child = node.right if address & bit else node.left
			if child is None:
				break
			index = child
			bit >>= 1
			depth += 1

		if depth == prefix_len:
			node = nodes[index]
			if node.entry is not None:
				raise DuplicateSubnetError(entry, node.entry)
			node.entry = entry
			self._count += 1
			return

		# then grow the rest of it
		while depth < prefix_len:
			child = len(nodes)
			nodes.append(ViewNode())
			if address & bit:
				nodes[index].right = child
			else:
				nodes[index].left = child
			index = child
			bit >>= 1
			depth += 1

		nodes[index].entry = entry
		self._count += 1

	def lookup(self, address):

		"""Returns the entry of the longest prefix containing address, or
		None if no prefix does."""

		nodes = self._nodes
		best = None
		bit = 0x80000000
		index = 0

		while index is not None:
			node = nodes[index]
			if node.entry is not None:
				best = node.entry
			if not bit: # depth 32
				break
			index = node.right if address & bit else node.left
			bit >>= 1

		return best

	def find(self, address, prefix_len):

		"""Returns the entry attached to exactly this prefix, or None."""

		if not (0 <= prefix_len <= 32):
			raise ValueError('Invalid value %d for prefix len (out of range)' % prefix_len)

		nodes = self._nodes
		bit = 0x80000000
		index = 0
		for _ in range(prefix_len):
			node = nodes[index]
			index = node.right if address & bit else node.left
			if index is None:
				return None
			bit >>= 1
		return nodes[index].entry

	def _dfi(self, index, address, depth):
		node = self._nodes[index]
		if node.entry is not None:
			yield (address, depth, node.entry)
		if node.left is not None:
			for t in self._dfi(node.left, address, depth+1):
				yield t
		if node.right is not None:
			for t in self._dfi(node.right, address | (0x80000000 >> depth), depth+1):
				yield t

	def dfi(self):
		"""Performs depth-first iteration over the trie. Yields (address,
		prefix_len, entry) tuples for every entry, a prefix before the
		prefixes it contains and the 0 branch before the 1 branch."""
		return self._dfi(0, 0, 0)

	def dump(self, file=None):
		"""Used for debugging. Prints out the trie an human-friendly way."""
		for (address, plen, entry) in self.dfi():
			print(' '*plen, '%s/%d' % (formatAddress(address), plen), entry, file=file)
