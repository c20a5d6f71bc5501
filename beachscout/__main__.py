from beachscout.cli import main

raise SystemExit(main())
