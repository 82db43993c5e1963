"""SQLite connections, schema and track storage for the library."""