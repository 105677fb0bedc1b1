"""Rolling ARMA forecasts of the Hourly Ontario Energy Price versus IESO predispatch."""
