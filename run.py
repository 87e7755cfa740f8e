import os
from portfolio import create_app
from portfolio.extensions import get_backend

# 从环境变量获取配置模式
# 支持 FLASK_ENV 或 FLASK_CONFIG
config_name = os.getenv('FLASK_ENV') or os.getenv('FLASK_CONFIG') or 'default'
if config_name in ('development', 'dev'):
    config_name = 'development'
elif config_name not in ('production', 'testing'):
    config_name = 'default'

app = create_app(config_name)

@app.shell_context_processor
def make_shell_context():
    """
    配置 Flask Shell 上下文。
    允许在命令行中使用 'flask shell' 时直接拿到后端服务。
    """
    return dict(app=app, backend=get_backend())

if __name__ == '__main__':
    print("-------------------------------------------------------")
    print("   PORTFOLIO SERVER STARTING                           ")
    print("   Target: Localhost:5000                              ")
    print("-------------------------------------------------------")
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)))
