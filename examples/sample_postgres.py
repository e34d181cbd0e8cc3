from dotenv import load_dotenv
import os
from sqlstrings import TemplateSettings, sql
from sqlstrings.execution.postgres import PostgresExecutor

def main():
    # Load environment variables from .env file
    load_dotenv()

    # Build connection string from environment variables
    db_host = os.getenv('DB_HOST')
    db_port = os.getenv('DB_PORT')
    db_name = os.getenv('DB_NAME')
    db_user = os.getenv('DB_USER')
    db_password = os.getenv('DB_PASSWORD')

    connection_string = f"postgresql://{db_user}:{db_password}@{db_host}:{db_port}/{db_name}"

    # Create executor
    executor = PostgresExecutor(connection_info=connection_string)

    # Template behaviour (strict quoting, marker, escape) can also come from the environment
    settings = TemplateSettings.from_env()

    print("Creating table 'sample_users'...")
    executor.execute_raw(
        "CREATE TABLE IF NOT EXISTS sample_users ("
        "id SERIAL PRIMARY KEY, name TEXT NOT NULL, age INTEGER)"
    )
    print("Table created successfully!")

    print("Inserting sample data...")

    # Insert some users
    users_data = [
        ("Alice", 30),
        ("Bob", 25),
        ("Charlie", 35)
    ]

    for user in users_data:
        executor.execute(sql("INSERT INTO sample_users (name, age) VALUES ($(*user))", settings=settings))

    print(f"Inserted {len(users_data)} users successfully!")

    print("Selecting users whose names start with a prefix...")

    # The literal '%' is escaped for psycopg; the prefix travels as a parameter
    prefix = "C"
    results = executor.fetch_all(
        sql("SELECT * FROM sample_users WHERE name LIKE $prefix || '%' ORDER BY id", settings=settings)
    )

    print("Users in database:")
    for row in results:
        print(f"ID: {row[0]}, Name: {row[1]}, Age: {row[2]}")

    print("Dropping table 'sample_users'...")
    executor.execute_raw("DROP TABLE IF EXISTS sample_users")
    print("Table dropped successfully!")

if __name__ == "__main__":
    main()
