from mkindex.cli import main

main()
