"""Package entry point for ``python -m rsvp_reader``.

Delegates to the CLI's main(); ``python -m rsvp_reader serve`` starts the
local API.
"""

from rsvp_reader.cli import main

if __name__ == "__main__":
    main()
