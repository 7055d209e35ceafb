from propsort.cli import main

main()
