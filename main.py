from regression_playground.main import main

if __name__ == "__main__":
    main()
