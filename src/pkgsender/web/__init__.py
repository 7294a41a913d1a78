"""HTTP frontend for pkgsender.

Serves the package listing page, accepts install requests and serves
exposed package files to the console.
"""
