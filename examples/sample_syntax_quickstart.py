from sqlstrings import Sql, TemplateSettings, prepare, sql
from sqlstrings.compiler import placeholder_for_paramstyle


def main() -> None:
    # Syntax-only example: build a query from a template and compile it for several paramstyles.
    user = {"name": "alice", "roles": ["admin", "editor"]}
    min_logins = 3

    query = sql("SELECT id, email FROM users WHERE name = $(user['name'])")
    query = query + sql("AND role IN ($(*user['roles']))") + sql("AND logins >= $min_logins")

    print(query)

    for paramstyle in ("dollar", "qmark", "format", "numeric"):
        text, params = prepare(query, placeholder_for_paramstyle(paramstyle))
        print(f"{paramstyle:>8}: {text}  {params}")

    # Fragments are values too: conditions can be assembled and nested freely.
    conditions = [sql("status = $(status)", status="active"), sql("deleted_at IS NULL")]
    where = Sql()
    for condition in conditions:
        where = condition if not where else where + sql("AND") + condition
    print(prepare(sql("SELECT count(*) FROM accounts WHERE $where")))

    # Markers inside quotes are literal text unless strict mode is on.
    print(prepare(sql("SELECT '$notes' AS label, \\$1 AS escaped")))
    strict = TemplateSettings(allow_markers_in_strings=False)
    print(prepare(sql("SELECT $min_logins", settings=strict)))


if __name__ == "__main__":
    main()
