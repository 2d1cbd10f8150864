from scratchapixel.cli.main import main

raise SystemExit(main())
