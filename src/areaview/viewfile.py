
"""Loads subnet to area assignments from a view file into a ViewTrie.

Each non-blank line of a view file has exactly five whitespace-separated
fields. The second names the area and the fifth lists its subnets:

	view cn_tel { match-clients {1.0.1.0/24;1.0.2.0/23;};};

A malformed line, a malformed subnet or a subnet already assigned aborts
the load with a ViewFileError naming the line."""

import logging

from areaview import (
	Entry,
	ViewTrie,
	InvalidSubnetError,
	DuplicateSubnetError,
	parseStrQuads,
	parseSubnet,
	hostBits,
)

logger = logging.getLogger(__name__)

LINE_FIELDS = 5
AREA_FIELD = 1
NET_FIELD = 4

NET_FIELD_PREFIX = '{'
NET_FIELD_SUFFIX = ';};};'
NET_FIELD_SEP = ';'


class ViewFileError(Exception):
	def __init__(self, filename, lineno, reason):
		Exception.__init__(self, filename, lineno, reason)
		self.filename = filename
		self.lineno = lineno
		self.reason = reason
	def __str__(self):
		return '%s line %d: %s' % (
			self.filename or '<lines>',
			self.lineno,
			self.reason
		)


def splitSubnets(field):

	'''given the subnet field of a view line (e.g.
	"{1.0.1.0/24;1.0.2.0/23;};};"), return the list of subnet strings in
	it.'''

	if field.startswith(NET_FIELD_PREFIX):
		field = field[len(NET_FIELD_PREFIX):]
	if field.endswith(NET_FIELD_SUFFIX):
		field = field[:-len(NET_FIELD_SUFFIX)]
	return field.split(NET_FIELD_SEP)


class View:

	"""A set of subnet to area assignments loaded from one or more view
	files, answering which area an address belongs to. lineno counts every
	line read so far, blank ones included, across all loads."""

	def __init__(self):
		self.trie = ViewTrie()
		self.filename = None
		self.lineno = 0

	def __len__(self):
		return len(self.trie)

	def load(self, filename):
		'''read assignments from the named file. Returns the number of
		subnets loaded. On ViewFileError the view holds the subnets of the
		lines before the failing one and should be discarded.'''
		with open(filename, 'r', encoding='utf-8') as f:
			self.filename = filename
			return self.load_lines(f)

	def load_lines(self, lines):
		'''read assignments from an iterable of lines. Returns the number
		of subnets loaded.'''
		count = 0
		for line in lines:
			self.lineno += 1
			line = line.strip()
			if not line:
				continue
			count += self._load_line(line)
		logger.info('loaded %d subnets from %s', count, self.filename or '<lines>')
		return count

	def _error(self, reason):
		return ViewFileError(self.filename, self.lineno, reason)

	def _load_line(self, line):
		fields = line.split()
		if len(fields) != LINE_FIELDS:
			raise self._error('illegal line format: expected %d fields, got %d' % (LINE_FIELDS, len(fields)))

		area = fields[AREA_FIELD]
		subnets = splitSubnets(fields[NET_FIELD])

		for subnet in subnets:
			try:
				(addr, plen) = parseSubnet(subnet)
			except InvalidSubnetError as ise:
				raise self._error(str(ise)) from ise

			if hostBits(addr, plen):
				logger.warning('%s line %d: subnet %s has host bits set past /%d',
					self.filename or '<lines>', self.lineno, subnet, plen)

			try:
				self.trie.insert(addr, plen, Entry(area, subnet))
			except DuplicateSubnetError as dse:
				raise self._error(str(dse)) from dse

			logger.debug('%s -> %s', subnet, area)

		return len(subnets)

	def lookup(self, address):
		'''return the Entry of the most specific subnet containing the
		dotted quad address, or None. Raises InvalidAddressError if address
		is malformed.'''
		return self.trie.lookup(parseStrQuads(address))

	def area(self, address):
		'''like lookup(), but return only the area name.'''
		entry = self.lookup(address)
		if entry is None:
			return None
		return entry.area


def load(filename):
	'''return a new View loaded from the named file.'''
	view = View()
	view.load(filename)
	return view
