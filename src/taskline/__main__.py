from taskline.cli.main import main

raise SystemExit(main())
