"""Domain modules: accounts, meters, wallets, transactions, debts and notifications."""
