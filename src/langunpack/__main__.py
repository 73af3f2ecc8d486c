from langunpack.cli import main

raise SystemExit(main())
