from skelgen.cli import main

main()
