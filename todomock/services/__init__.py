"""Services Layer — async shell around the pure core: Store, Api facade, Dispatcher."""
