from maman.cli import main

raise SystemExit(main())
