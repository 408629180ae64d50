"""Entry point for running Event Planner as a module.

This file allows Event Planner to be run with: python -m eventplanner
It's also the target of the `eventplanner` console script.
"""

from gevent import monkey

monkey.patch_all()

from eventplanner.app import main  # noqa: E402

if __name__ == "__main__":
    main()
