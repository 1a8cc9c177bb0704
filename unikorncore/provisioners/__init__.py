"""Provisioner helpers: the background deletion flag and scheduling snippets."""