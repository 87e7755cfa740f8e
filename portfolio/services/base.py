"""数据访问服务基类：每个服务持有注入的 Supabase 客户端，对应一张表"""
from postgrest.exceptions import APIError

from portfolio.exceptions import NotFound

# PostgREST 在 .single() 查询没有命中任何行时返回的错误码
ROW_NOT_FOUND = 'PGRST116'


class BaseService:
    table = None

    def __init__(self, client):
        self.client = client

    def query(self):
        return self.client.table(self.table)

    def fetch_single(self, query):
        """执行 .single() 查询：未命中返回 None，其他后端错误原样抛出"""
        try:
            response = query.single().execute()
        except APIError as e:
            if e.code == ROW_NOT_FOUND:
                return None
            raise
        return response.data

    def insert_row(self, payload):
        """插入一行并返回插入后的行"""
        response = self.query().insert(payload).execute()
        return response.data[0]

    def update_row(self, id, updates):
        """按 ID 更新一行并返回更新后的行"""
        response = self.query().update(updates).eq('id', id).execute()
        if not response.data:
            raise NotFound(f'No row with id {id} in {self.table}')
        return response.data[0]

    def delete_row(self, id):
        self.query().delete().eq('id', id).execute()
