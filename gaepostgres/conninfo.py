##
# .conninfo - parse and construct libpq connection strings
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
"""
Parse and construct libpq style connection strings.

Connection strings are sequences of ``key=value`` pairs separated by
whitespace::

	host=/cloudsql/project:region:instance user=me password='a b'

Whitespace is permitted around keys and around the ``=``. Values are either
bare, ending at the first unescaped whitespace, or single-quoted. In both forms
a backslash makes the following character literal.

This module is executable via -m: python -m gaepostgres.conninfo.
It prints the options found in each argument::

	$ python -m gaepostgres.conninfo "user=me password='a b'"
	user='me'
	password='a b'
"""
import sys
from .exceptions import \
	ParseError, MissingEqualsError, UnterminatedQuoteError, TrailingBackslashError

__all__ = [
	'isspace',
	'Scanner',
	'split',
	'parse',
	'escape',
	'unescape',
	'marshal',
]

# Characters having the Unicode White_Space property.
whitespace = frozenset(
	"\t\n\x0b\x0c\r \x85\xa0\u1680\u2028\u2029\u202f\u205f\u3000" + \
	"".join(map(chr, range(0x2000, 0x200b)))
)

def isspace(c, whitespace = whitespace) -> bool:
	'Whether `c` separates pairs and terminates keys and bare values'
	return c in whitespace

class Scanner(object):
	"""
	A forward only cursor over a string.

	`position` is the index of the next character to be read and `current` is
	the character most recently returned, the single character of lookahead
	carried between key and value scanning. Both reads return `None` once the
	source is exhausted.
	"""
	__slots__ = ('source', 'position', 'current')

	def __init__(self, source):
		self.source = source
		self.position = 0
		self.current = None

	def next(self):
		'Read and return the next character, or `None` at the end'
		if self.position < len(self.source):
			self.current = self.source[self.position]
			self.position += 1
		else:
			self.current = None
		return self.current

	def skip_spaces(self):
		'Read and return the next non-whitespace character, or `None` at the end'
		c = self.next()
		while c is not None and isspace(c):
			c = self.next()
		return c

	def __repr__(self):
		return '%s.%s(%r)[%d]' %(
			type(self).__module__,
			type(self).__name__,
			self.source,
			self.position,
		)

def _key(scanner):
	"""
	Read a key and its ``=``.

	Returns `None` when only whitespace remains.
	"""
	c = scanner.skip_spaces()
	if c is None:
		return None

	key = []
	while c is not None and c != '=' and not isspace(c):
		key.append(c)
		c = scanner.next()
	key = ''.join(key)

	if c != '=':
		c = scanner.skip_spaces()
		if c != '=':
			raise MissingEqualsError(key, position = scanner.position)
	return key

def _quoted_value(scanner, key):
	'Read the remainder of a quoted value; the opening quote has been read.'
	value = []
	while True:
		c = scanner.next()
		if c is None:
			raise UnterminatedQuoteError(key = key, position = scanner.position)
		if c == "'":
			break
		if c == '\\':
			c = scanner.next()
			if c is None:
				raise UnterminatedQuoteError(key = key, position = scanner.position)
		value.append(c)
	return ''.join(value)

def _bare_value(scanner, key):
	'Read a bare value starting at `scanner.current`.'
	value = []
	c = scanner.current
	while c is not None and not isspace(c):
		if c == '\\':
			c = scanner.next()
			if c is None:
				raise TrailingBackslashError(key = key, position = scanner.position)
		value.append(c)
		c = scanner.next()
	return ''.join(value)

def split(s):
	"""
	Yield the ``(key, value)`` pairs of the connection string `s` in the order
	they appear; repeated keys are yielded each time.

	Raises a `gaepostgres.exceptions.ParseError` when the string is malformed.
	"""
	scanner = Scanner(s)
	while True:
		key = _key(scanner)
		if key is None:
			break

		c = scanner.skip_spaces()
		if c is None:
			# libpq: a trailing "key=" is an empty value
			yield key, ''
			break
		elif c == "'":
			yield key, _quoted_value(scanner, key)
		else:
			yield key, _bare_value(scanner, key)

def parse(s, options = None):
	"""
	Parse the connection string `s` into a dictionary; the last occurrence of
	a key wins.

	If `options` is given, the pairs are stored into it and it is returned.
	On error its contents are undefined.
	"""
	if options is None:
		options = {}
	for k, v in split(s):
		options[k] = v
	return options

def escape(value):
	"""
	Escape `value` so that it is read back as a single bare value.

	Backslashes are doubled, then whitespace and single quotes are prefixed with
	a backslash. The empty string becomes ``''`` as an empty bare value cannot
	be followed by another pair.

	For empty values and for whitespace other than the space character the
	result differs from escaping only backslash, space and quote.
	"""
	if not value:
		return "''"
	value = value.replace('\\', '\\\\')
	value = ''.join([
		'\\' + c if isspace(c) else c for c in value
	])
	return value.replace("'", "\\'")

def unescape(value):
	"""
	Reverse `escape` on a bare value: every backslash makes the following
	character literal.

	Raises `gaepostgres.exceptions.TrailingBackslashError` if `value` ends with
	an unpaired backslash.
	"""
	chars = iter(value)
	out = []
	for c in chars:
		if c == '\\':
			c = next(chars, None)
			if c is None:
				raise TrailingBackslashError(position = len(value))
		out.append(c)
	return ''.join(out)

def marshal(options):
	"""
	Construct a connection string from a mapping of options.

	Each pair is written as ``key=value `` in the mapping's iteration order;
	the result always ends with a space. Keys are written verbatim.
	"""
	return ''.join([
		k + '=' + escape(v) + ' ' for k, v in options.items()
	])

def main(args, out = None, err = None):
	out = out or sys.stdout
	err = err or sys.stderr
	rv = 0
	for arg in args:
		try:
			options = parse(arg)
		except ParseError as e:
			err.write('%s: %s\n' %(e.kind, e))
			rv = 1
			continue
		for k, v in options.items():
			out.write('%s=%r\n' %(k, v))
	return rv

if __name__ == '__main__':
	sys.exit(main(sys.argv[1:]))
