from sboot.cli import main

raise SystemExit(main())
