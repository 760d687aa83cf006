from src.rpc_sync.cli import main

# python -m src.rpc_sync sync --no-progress
if __name__ == "__main__":
    main()
