"""Class bookings and the seat ledger behind them."""
