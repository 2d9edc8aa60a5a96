import uvicorn

from ghgql import GitHubUserClient, GraphQL, Settings, make_schema

settings = Settings()
schema = make_schema(client=GitHubUserClient(settings))

app = GraphQL(schema, debug=True)

if __name__ == '__main__':
    uvicorn.run(app, port=8080)
