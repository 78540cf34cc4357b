from orders_api.cli import main


main()
