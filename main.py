"""Simple entrypoint to print a user's closet summary locally."""

import json
import sys

from closet_app.app import ClosetApp


def main() -> None:
    user_id = sys.argv[1] if len(sys.argv) > 1 else "demo-user"
    app = ClosetApp()
    print(json.dumps(app.summary(user_id), indent=2, default=str))


if __name__ == "__main__":
    main()
