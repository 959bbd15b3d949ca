from promprobe.cli import main

raise SystemExit(main())
