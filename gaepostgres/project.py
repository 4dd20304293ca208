'project information'

#: project name
name = 'py-gaepostgres'

#: IRI based project identity
identity = 'https://github.com/broady/gae-postgres'

author = 'Chris Broadfoot <cbro@google.com>'
description = 'PostgreSQL connection strings and Cloud SQL routing for App Engine'

# Set this to the target date when approaching a release.
date = None
tags = set(('features',))
version_info = (0, 1, 0)
version = '.'.join(map(str, version_info)) + (date is None and 'dev' or '')
