from cafe_order.main import main

main()
