"""
比赛数据读取与排名输出
"""
