from cache_warmer.main import main

raise SystemExit(main())
