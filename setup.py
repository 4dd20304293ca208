#!/usr/bin/env python
##
# setup.py - setuptools packaging for gaepostgres
# copyright 2017, Google Inc.
# Use of this source code is governed by the Apache 2.0 license.
##
import sys
import os

if sys.version_info[:2] < (3,6):
	sys.stderr.write(
		"ERROR: py-gaepostgres is for Python 3.6 and greater." + os.linesep
	)
	sys.stderr.write(
		"HINT: setup.py was ran using Python " + \
		'.'.join([str(x) for x in sys.version_info[:3]]) +
		': ' + sys.executable + os.linesep
	)
	sys.exit(1)

# project data is kept in `gaepostgres.project`
sys.path.insert(0, '')

sys.dont_write_bytecode = True
import gaepostgres.project as project
sys.dont_write_bytecode = False

defaults = dict(
	name = project.name,
	version = project.version,
	description = project.description,
	author = project.author.split(' <')[0],
	author_email = project.author.split(' <')[1].rstrip('>'),
	url = project.identity,
	license = 'Apache License 2.0',
	packages = [
		'gaepostgres',
		'gaepostgres.test',
	],
	classifiers = [
		'Development Status :: 3 - Alpha',
		'Intended Audience :: Developers',
		'License :: OSI Approved :: Apache Software License',
		'Programming Language :: Python :: 3',
		'Topic :: Database',
	],
	python_requires = '>=3.6',
)

if __name__ == '__main__':
	from setuptools import setup
	setup(**defaults)
