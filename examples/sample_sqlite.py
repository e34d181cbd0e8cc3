import os

from sqlstrings import sql
from sqlstrings.execution.sqlite import SqliteExecutor

def main():
    # Define database path
    db_path = "static/test-sqlite/db.sqlite"
    os.makedirs(os.path.dirname(db_path), exist_ok=True)

    # Create executor
    executor = SqliteExecutor(connection_info=db_path)

    print("Creating table 'sample_users'...")
    executor.execute_raw(
        "CREATE TABLE IF NOT EXISTS sample_users ("
        "id INTEGER PRIMARY KEY, name TEXT NOT NULL, age INTEGER)"
    )
    print("Table created successfully!")

    print("Inserting sample data...")

    # Insert some users; each value becomes a bound parameter
    users_data = [
        ("Alice", 30),
        ("Bob", 25),
        ("Charlie", 35)
    ]

    for name, age in users_data:
        executor.execute(sql("INSERT INTO sample_users (name, age) VALUES ($name, $age)"))

    print(f"Inserted {len(users_data)} users!")

    print("Querying all users...")
    for row in executor.fetch_all(sql("SELECT id, name, age FROM sample_users ORDER BY id")):
        print(f"  ID: {row[0]}, Name: {row[1]}, Age: {row[2]}")

    print("Querying selected users by name...")
    names = ["Alice", "Charlie"]
    query = sql("SELECT name, age FROM sample_users WHERE name IN ($(*names))") + sql("ORDER BY age DESC")
    print(query)
    for row in executor.fetch_all(query):
        print(f"  Name: {row[0]}, Age: {row[1]}")

    print("Cleaning up - dropping table...")
    executor.execute_raw("DROP TABLE IF EXISTS sample_users")
    print("Table dropped successfully!")

if __name__ == "__main__":
    main()
