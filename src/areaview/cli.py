
"""Command line front end: load a view file and print the area of each
address given."""

import argparse
import logging
import sys

from areaview import InvalidAddressError
from areaview.viewfile import View, ViewFileError

logger = logging.getLogger(__name__)


def build_parser():
	parser = argparse.ArgumentParser(
		prog='areaview',
		description='Print the area (view) of the most specific subnet containing each address.',
	)
	parser.add_argument('viewfile', help='view file of area to subnet assignments')
	parser.add_argument('addresses', nargs='*', metavar='ADDRESS', help='dotted quad IPv4 address')
	parser.add_argument('--dump', action='store_true', help='print the loaded trie')
	parser.add_argument('-v', '--verbose', action='store_true', help='log at DEBUG level')
	return parser


def main(argv=None):
	args = build_parser().parse_args(argv)

	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format='%(levelname)s %(name)s: %(message)s',
	)

	view = View()
	try:
		view.load(args.viewfile)
	except (OSError, ViewFileError) as e:
		print('areaview: %s' % e, file=sys.stderr)
		return 1

	if args.dump:
		view.trie.dump()

	status = 0
	for address in args.addresses:
		try:
			entry = view.lookup(address)
		except InvalidAddressError as iae:
			print('areaview: %s' % iae, file=sys.stderr)
			status = 1
			continue
		if entry is None:
			logger.debug('no subnet contains %s', address)
			print('%s -' % address)
		else:
			print('%s %s %s' % (address, entry.area, entry.subnet))

	return status


if __name__ == '__main__':
	sys.exit(main())
