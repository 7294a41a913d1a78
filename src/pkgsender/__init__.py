"""pkgsender -- send package files from a local file server to a console.

Lists the ``.pkg`` files under a configured directory, serves the chosen
one over HTTP and asks the console's install API to download and install
it from this machine.
"""

__version__ = "0.1.0"
