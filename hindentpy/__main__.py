from hindentpy.cli import main

raise SystemExit(main())
